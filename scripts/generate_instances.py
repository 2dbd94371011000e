#!/usr/bin/env python3
import argparse
import json
from pathlib import Path

from simplex_dual.instances import generate_covering_lp, generate_random_lp


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate random LP instances as JSON")
    parser.add_argument("--vars", type=int, default=3)
    parser.add_argument("--constraints", type=int, default=3)
    parser.add_argument("--count", type=int, default=1)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--covering", action="store_true", help="minimize with >= rows instead of maximize with <=")
    parser.add_argument("--out", type=Path, default=Path("instances"))
    args = parser.parse_args()

    generator = generate_covering_lp if args.covering else generate_random_lp
    args.out.mkdir(parents=True, exist_ok=True)
    for idx in range(args.count):
        seed = None if args.seed is None else args.seed + idx
        problem = generator(args.vars, args.constraints, seed)
        path = args.out / f"lp_{idx}.json"
        path.write_text(json.dumps(problem.model_dump(), indent=2))
        print(path)


if __name__ == "__main__":
    main()
