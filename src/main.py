"""Entry point for the slide2048 puzzle."""
from slide2048.app import main

if __name__ == "__main__":
    main()
