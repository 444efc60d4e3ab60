from slide2048.events.bus import EventBus


def test_event_bus_emit_subscribe():
    bus = EventBus()
    received = {}

    def handler(sender, **kwargs):
        received.update(kwargs)

    bus.subscribe("test", handler)
    bus.emit("test", value=42, msg="hello")

    assert received["value"] == 42
    assert received["msg"] == "hello"


def test_emit_without_subscribers_is_a_no_op():
    bus = EventBus()
    bus.emit("nobody_listens", value=1)


def test_bound_methods_stay_subscribed_without_other_references():
    bus = EventBus()
    hits = []

    class Listener:
        def on_ping(self, sender, **kwargs):
            hits.append(kwargs.get("n"))

    bus.subscribe("ping", Listener().on_ping)
    bus.emit("ping", n=1)
    assert hits == [1]
