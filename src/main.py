import sys
import logging
from typing import List, Optional

from pydantic import ValidationError

from errors import StreamError
from payments_engine import PaymentsEngine
from report_writer import write_report
from settings import Settings


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def main(argv: Optional[List[str]] = None):
    filepaths = sys.argv[1:] if argv is None else argv
    if not filepaths:
        print("Usage: python main.py <input.csv> [<input.csv> ...]", file=sys.stderr)
        sys.exit(1)

    try:
        settings = Settings()
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)

    engine = PaymentsEngine(
        strict_disputes=settings.strict_disputes,
        freeze_locked_accounts=settings.freeze_locked_accounts,
    )
    try:
        accounts = engine.process_files(filepaths)
    except StreamError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    write_report(accounts.values(), sys.stdout)


if __name__ == "__main__":
    main()
