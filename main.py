"""Entry point: python main.py 25m"""

from paneltimer.__main__ import main

if __name__ == "__main__":
    main()
