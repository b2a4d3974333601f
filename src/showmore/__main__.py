"""Entry point for `python -m showmore` and `showmore` CLI."""

from showmore.cli.app import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
