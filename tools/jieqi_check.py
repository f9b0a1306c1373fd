from __future__ import annotations

"""
Jieqi (二十四节气) check script.

Uses:
- ccal.features.jieqi.jieqi_events_for_year
- ccal.core.providers.skyfield_almanac.SkyfieldAlmanac (--verify)
"""

import argparse

from ccal.features.jieqi import jieqi_events_for_year, jieqi_mismatches

from tools.common import add_ephemeris_args, dump_json, find_ephemeris, year_range


def main() -> None:
    parser = argparse.ArgumentParser(description="Jieqi (二十四节气) check")
    parser.add_argument("--years", required=True, help="YYYY or YYYY-YYYY")
    parser.add_argument("--verify", action="store_true", help="compare with skyfield almanac (needs ephemeris)")
    parser.add_argument("--json", action="store_true")
    add_ephemeris_args(parser)
    args = parser.parse_args()

    y0, y1 = year_range(args.years)
    if y1 < y0:
        parser.error("--years end must be >= start")

    if not args.verify:
        payload = {}
        for year in range(y0, y1 + 1):
            events = jieqi_events_for_year(year)
            if args.json:
                payload[str(year)] = [e.to_dict() for e in events]
                continue
            for e in events:
                print(f"{e.date.isoformat()}  {e.name}  {e.kind}  n={e.n:02d}")
        if args.json:
            dump_json(payload)
        return

    ephem_path = find_ephemeris(args)

    from ccal.core.providers.skyfield_almanac import SkyfieldAlmanac

    ref = SkyfieldAlmanac(ephemeris=ephem_path.name, ephemeris_path=ephem_path)

    rows = []
    for year in range(y0, y1 + 1):
        for m in jieqi_mismatches(year, ref.jieqi_days(year)):
            rows.append(
                {
                    "year": year,
                    "n": m.n,
                    "name": m.name,
                    "formula": m.formula.isoformat(),
                    "reference": m.reference.isoformat(),
                    "delta_days": m.delta_days,
                }
            )

    if args.json:
        dump_json({"mismatches": rows})
        return

    for r in rows:
        print(f"{r['year']}  {r['name']}  formula={r['formula']}  almanac={r['reference']}  delta={r['delta_days']:+d}")
    print(f"\n# {len(rows)} mismatches in {y0}..{y1}")


if __name__ == "__main__":
    main()
