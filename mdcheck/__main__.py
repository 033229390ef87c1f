"""Entry point: python -m mdcheck [run|init|help|version]"""

from mdcheck.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
