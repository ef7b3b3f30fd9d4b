"""Run the Movie Store server: `python -m moviestore`."""

from moviestore.main import run

if __name__ == "__main__":
    run()
