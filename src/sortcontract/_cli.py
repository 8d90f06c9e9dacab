from __future__ import annotations

import argparse
import functools
import importlib
import json
import sys
import time

from sortcontract._comparators import CATALOG, from_catalog
from sortcontract._demo import DEFAULT_INPUT, axiom_report, chaos_demo, default_seed
from sortcontract._engine import ObligationResult, check_module
from sortcontract._proof import DEFAULT_PROPERTIES, PROPERTIES, prove_bounded
from sortcontract._showdown import contestants, render_showdown, showdown
from sortcontract._sorter import insertion_sort
from sortcontract._term import bold, dim, force_color, green, red, style, yellow


def _status_label(status: str) -> str:
    if status == "pass":
        return green("PASS")
    if status == "fail":
        return style("FAIL", 31, 1)  # red bold
    if status == "error":
        return red("ERROR")
    if status == "skip":
        return yellow("SKIP")
    return status.upper()


def _print_result_line(r: ObligationResult, *, verbose: bool = False) -> None:
    label = _status_label(r.status)
    # Pad the raw status, not the colored one; ANSI codes would break alignment
    pad = " " * (5 - len(r.status))
    timing = "  " + dim(f"({r.duration_s:.1f}s)") if r.duration_s >= 0.05 else ""
    print(f"  {pad}{label}  {r.obligation:<22}  {bold(r.function)}{timing}")

    if not verbose or r.status not in ("fail", "error"):
        return
    ce = r.details.get("counterexample")
    if isinstance(ce, dict):
        for key, title in (("kwargs", "kwargs"), ("impl_result", "impl"), ("spec_result", "spec")):
            if key in ce:
                print(f"         {title + ':':<8}{json.dumps(ce[key], default=str)}")
        for key in ("note", "error"):
            if key in ce:
                print(f"         {key + ':':<8}{ce[key]}")
    elif "error" in r.details:
        print(f"         error:  {r.details['error']}")


def _print_summary(results: list[ObligationResult], total_s: float, out_dir: str) -> None:
    passed = sum(1 for r in results if r.status == "pass")
    failed = sum(1 for r in results if r.status in ("fail", "error"))
    skipped = sum(1 for r in results if r.status == "skip")

    parts: list[str] = []
    if passed:
        parts.append(green(f"{passed} passed"))
    if failed:
        parts.append(red(f"{failed} failed"))
    if skipped:
        parts.append(dim(f"{skipped} skipped"))

    summary = ", ".join(parts) if parts else "no obligations"
    print(f"\n{summary}  {dim(f'({total_s:.1f}s total)')}  {dim(f'JSON reports in {out_dir}/')}")


def _cmd_check(args: argparse.Namespace) -> int:
    json_mode = args.json

    def on_result(r: ObligationResult) -> None:
        if not json_mode and not args.quiet:
            _print_result_line(r, verbose=args.verbose)

    try:
        importlib.import_module(args.module)
    except ImportError as e:
        print(f"error: could not import module '{args.module}': {e}", file=sys.stderr)
        return 1

    t_start = time.monotonic()
    results, _trust = check_module(
        args.module,
        out_dir=args.out,
        max_list_size=args.max_list_size,
        smoke_max_list_size=args.smoke_max_list_size,
        on_result=on_result,
        prove=args.prove,
    )
    total_s = time.monotonic() - t_start
    failed = any(r.status in ("fail", "error") for r in results)

    if json_mode:
        print(json.dumps([r.to_json() for r in results], indent=2, default=str))
        return 1 if failed else 0
    if not results:
        print(f"warning: no @requires/@ensures/@against decorated functions found in '{args.module}'",
              file=sys.stderr)
        return 0

    _print_summary(results, total_s, args.out)
    return 1 if failed else 0


def _values(raw: list[int]) -> list[int]:
    return raw if raw else list(DEFAULT_INPUT)


def _cmd_demo(args: argparse.Namespace) -> int:
    return 0 if chaos_demo(_values(args.values), seed=args.seed, rounds=args.rounds) else 1


def _cmd_axioms(args: argparse.Namespace) -> int:
    unknown = [n for n in args.names if n not in CATALOG]
    if unknown:
        print(f"error: unknown comparator(s): {', '.join(unknown)}", file=sys.stderr)
        return 2
    axiom_report(args.names, tuple(range(args.domain_size)), seed=args.seed)
    return 0


def _cmd_prove(args: argparse.Namespace) -> int:
    cmp = from_catalog(args.comparator, seed=args.seed)
    result = prove_bounded(
        functools.partial(insertion_sort, compare=cmp),
        size=args.size,
        bound=args.bound,
        properties=args.properties or DEFAULT_PROPERTIES,
    )
    if args.json:
        print(json.dumps(result.to_json(), indent=2))
        return 0 if result.proved else 1

    print(bold(f"insertion_sort with {args.comparator} comparator, "
               f"all lists of length {result.size} over 0..{result.bound - 1}"))
    for name, statement in result.properties.items():
        print(f"  {dim(name + ':')} {statement}")
    if result.proved:
        print(f"{green('PROVED')}  {result.cases} cases, no counterexample")
        return 0
    ce = result.counterexample or {}
    print(f"{style('REFUTED', 31, 1)}  after {result.cases} cases: {ce.get('property')} fails on "
          f"{ce.get('input')} -> {ce.get('output')}")
    return 1


def _cmd_showdown(args: argparse.Namespace) -> int:
    xs = _values(args.values)
    print(render_showdown(xs, showdown(xs, contestants(args.seed or 0))))
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="sortcontract",
        description="Comparator contracts: runtime checks, bounded proofs and chaos demos.",
    )
    p.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    sub = p.add_subparsers(dest="command", required=True)

    c = sub.add_parser("check", help="Check the contracts of decorated functions in a module")
    c.add_argument("module", help="Python module to import (e.g. mypkg.mymodule)")
    c.add_argument("--out", default=".sortcontract", help="Output directory for JSON reports")
    c.add_argument("--max-list-size", type=int, default=20, help="Max size for generated lists")
    c.add_argument("--smoke-max-list-size", type=int, default=5, help="Max size for smoke-test generation")
    c.add_argument("-v", "--verbose", action="store_true", help="Show counterexample details and timing")
    c.add_argument("-q", "--quiet", action="store_true", help="Only print summary and exit code")
    c.add_argument("--json", action="store_true", help="Output results as JSON array to stdout")
    c.add_argument("--prove", action="store_true", help="Attempt symbolic verification via CrossHair/Z3")
    c.set_defaults(handler=_cmd_check)

    d = sub.add_parser("demo", help="Sort under a chaos comparator and narrate the damage")
    d.add_argument("values", nargs="*", type=int, help="Input sequence (default: 1 3 5 7 6 4 2 0)")
    d.add_argument("--seed", type=int, default=None, help="Seed for the chaos comparator")
    d.add_argument("--rounds", type=int, default=3, help="Number of chaos rounds")
    d.set_defaults(handler=_cmd_demo)

    a = sub.add_parser("axioms", help="Report which comparators break which ordering axioms")
    a.add_argument("names", nargs="*", metavar="NAME",
                   help=f"Comparators to examine (default: all of {', '.join(sorted(CATALOG))})")
    a.add_argument("--domain-size", type=int, default=4, help="Check axioms on 0..N-1")
    a.add_argument("--seed", type=int, default=None, help="Seed for the chaos comparator")
    a.set_defaults(handler=_cmd_axioms)

    pr = sub.add_parser("prove", help="Prove sort properties by exhausting a bounded domain")
    pr.add_argument("--size", type=int, default=4, help="Length of every enumerated list")
    pr.add_argument("--bound", type=int, default=4, help="Elements range over 0..BOUND-1")
    pr.add_argument("--comparator", default="numeric", choices=sorted(CATALOG))
    pr.add_argument("--property", dest="properties", action="append", choices=sorted(PROPERTIES),
                    help="Property to prove (repeatable; default: idempotent and sum_preserving)")
    pr.add_argument("--seed", type=int, default=None, help="Seed for the chaos comparator")
    pr.add_argument("--json", action="store_true", help="Output the proof result as JSON")
    pr.set_defaults(handler=_cmd_prove)

    s = sub.add_parser("showdown", help="Pit the fake sorts against an honest one")
    s.add_argument("values", nargs="*", type=int, help="Input sequence (default: 1 3 5 7 6 4 2 0)")
    s.add_argument("--seed", type=int, default=None, help="Seed for the randomized contestants")
    s.set_defaults(handler=_cmd_showdown)

    args = p.parse_args(argv)
    if args.no_color:
        force_color(False)
    if "seed" in args and args.seed is None:
        try:
            args.seed = default_seed()
        except ValueError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2
    return int(args.handler(args))
