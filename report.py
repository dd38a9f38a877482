from __future__ import annotations
import argparse
import csv
from pathlib import Path
from statistics import mean


def parse_csv(path: Path):
    rows = []
    with path.open() as f:
        reader = csv.DictReader(f)
        for r in reader:
            rows.append(r)
    return rows


def to_float(x):
    if x is None or x == '' or x == 'None':
        return None
    try:
        return float(x)
    except ValueError:
        return None


def _values(rows, key):
    vals = [to_float(r.get(key)) for r in rows]
    return [v for v in vals if v is not None]


def summarize(rows):
    if not rows:
        return "No benchmark rows found."
    out = [f"Boards generated: {len(rows)}"]
    for name in sorted({r.get('difficulty', '') for r in rows}):
        group = [r for r in rows if r.get('difficulty', '') == name]
        validated = _values(group, 'validated')
        attempts = _values(group, 'attempts')
        elapsed = _values(group, 'elapsed_ms')
        encased = _values(group, 'encased')
        connected = _values(group, 'connected')
        out.append("")
        out.append(f"{name or 'unknown'} ({len(group)} boards):")
        if validated:
            out.append(f"  validated rate: {mean(validated):.3f}")
            out.append(f"  fallback boards: {int(len(validated) - sum(validated))}")
        if attempts:
            out.append(f"  mean attempts: {mean(attempts):.2f} (max {int(max(attempts))})")
        if elapsed:
            out.append(f"  mean generation time: {mean(elapsed):.2f} ms")
        if encased:
            out.append(f"  boards with an encased mine: {int(sum(encased))}")
        if connected:
            out.append(f"  boards with split empty regions: {int(len(connected) - sum(connected))}")
    return "\n".join(out)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--log_csv', type=str, default='logs/bench_log.csv')
    parser.add_argument('--out', type=str, default='REPORT.md')
    args = parser.parse_args()

    rows = parse_csv(Path(args.log_csv))
    text = summarize(rows)
    Path(args.out).write_text('# Generation Report\n\n' + text + '\n')
    print(text)


if __name__ == '__main__':
    main()
