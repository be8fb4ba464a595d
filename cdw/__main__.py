"""Allow ``python -m cdw``."""

from cdw.main import cli

if __name__ == "__main__":
    cli(prog_name="cdw")
