from __future__ import annotations

"""
Lunar (农历) check script.

Uses:
- ccal.core.lunisolar.lunar_dates_between
- ccal.core.solarterms.term_of
"""

import argparse
from datetime import timedelta

from ccal.core.lunisolar import lunar_dates_between
from ccal.core.solarterms import term_of

from tools.common import add_range_args, date_range_from_args, dump_json


def main() -> None:
    parser = argparse.ArgumentParser(description="Lunar (农历) check")
    add_range_args(parser)
    args = parser.parse_args()

    span = date_range_from_args(args)
    if span is None:
        parser.error("--date or --start/--end required")
    start, end = span

    rows = []
    for cur, l in lunar_dates_between(start, end + timedelta(days=1)):
        jieqi = term_of(cur.year, cur.month, cur.day)

        if args.json:
            rows.append(
                {
                    "date": cur.isoformat(),
                    "year": l.year,
                    "month": l.month,
                    "day": l.day,
                    "leap": l.is_leap,
                    "label": l.label,
                    "month_name": l.month_name,
                    "day_name": l.day_name,
                    "ganzhi_year": l.ganzhi_year,
                    "jieqi": jieqi,
                }
            )
        else:
            sep = "\n" if (l.day == 1 and cur != start) else ""
            tail = f"  [{jieqi}]" if jieqi else ""
            print(f"{sep}{cur.isoformat()}  L={l.label}  {l}{tail}")

    if args.json:
        dump_json({"rows": rows})


if __name__ == "__main__":
    main()
