# src/mender/__main__.py
from mender.app import run

if __name__ == "__main__":
    run()
