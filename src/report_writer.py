import csv
from decimal import Decimal
from typing import Iterable, TextIO

from models import ClientAccount

REPORT_HEADER = ["client", "available", "held", "total", "locked"]


def format_amount(value: Decimal) -> str:
    """Format amount with exactly 4 decimal places."""
    return f"{value:.4f}"


def write_report(accounts: Iterable[ClientAccount], out: TextIO) -> None:
    """Write one CSV row per account, in client id order, after the header."""
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(REPORT_HEADER)
    for account in sorted(accounts, key=lambda a: a.client_id):
        writer.writerow([
            account.client_id,
            format_amount(account.available),
            format_amount(account.held),
            format_amount(account.total),
            str(account.locked).lower(),
        ])
