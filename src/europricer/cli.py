import argparse
import logging
import sys

import numpy as np

from .black_scholes import price as bs_price
from .core import (
    CALL, DEFAULT_MATURITY, DEFAULT_PATHS, DEFAULT_RATE, DEFAULT_SPOT,
    DEFAULT_STRIKE, DEFAULT_VOLATILITY, SWEEP_FIELDS, OptionSpec, ContractType,
)
from .exceptions import PricingError
from .monte_carlo import MonteCarloPricer, euro_price_mc
from .sweep import sweep

logger = logging.getLogger(__name__)


def _kind(s: str):
    try:
        return ContractType.parse(s)
    except PricingError:
        raise argparse.ArgumentTypeError("kind must be 'call' or 'put'") from None


def _spec(args) -> OptionSpec:
    return OptionSpec(args.kind, args.S, args.K, args.T, args.sigma, args.r)


def add_common(parser: argparse.ArgumentParser):
    parser.add_argument("--S", type=float, default=DEFAULT_SPOT, help="spot")
    parser.add_argument("--K", type=float, default=DEFAULT_STRIKE, help="strike")
    parser.add_argument("--T", type=float, default=DEFAULT_MATURITY, help="years")
    parser.add_argument("--sigma", type=float, default=DEFAULT_VOLATILITY)
    parser.add_argument("--r", type=float, default=DEFAULT_RATE, help="cont. risk-free")
    parser.add_argument("--kind", type=_kind, default=CALL, help="call|put")


def add_mc(parser: argparse.ArgumentParser):
    parser.add_argument("--n-paths", dest="n_paths", type=int, default=DEFAULT_PATHS)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--workers", type=int, default=1)


def cmd_bs(args):
    print(f"{bs_price(_spec(args)):.10f}")


def cmd_mc(args):
    res = euro_price_mc(_spec(args), args.n_paths, seed=args.seed,
                        n_workers=args.workers, return_trials=args.show_trials > 0)
    print(f"{res.price:.10f}  (stderr {res.stderr:.10f})")
    if res.trials is not None:
        s = res.trials.summary()
        print(f"S_T min {s['st_min']:.4f}  max {s['st_max']:.4f}  mean {s['st_mean']:.4f}")
        print(f"{'eps':>10} {'S_T':>12} {'payoff':>12}")
        for eps, st, po in res.trials.sample_rows(args.show_trials, seed=args.seed):
            print(f"{eps:10.4f} {st:12.4f} {po:12.4f}")


def cmd_sweep(args):
    if args.linspace is not None:
        start, stop, num = args.linspace
        values = np.linspace(start, stop, int(num))
    else:
        values = args.values or []
    if args.method == "mc":
        pricer = MonteCarloPricer(args.n_paths, seed=args.seed)
    else:
        pricer = "bs"
    result = sweep(_spec(args), args.field, values, pricer, n_workers=args.workers)
    print(f"{args.field:>12} {'call':>12} {'put':>12}")
    for v, c, p in result.rows():
        print(f"{v:12.4f} {c:12.6f} {p:12.6f}")


def main(argv=None):
    p = argparse.ArgumentParser(prog="europricer", description="European option pricing CLI")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="cmd", required=True)

    # BS
    p_bs = sub.add_parser("bs", help="Black-Scholes price")
    add_common(p_bs)
    p_bs.set_defaults(func=cmd_bs)

    # Monte Carlo (GBM terminal)
    p_mc = sub.add_parser("mc", help="Monte Carlo price (GBM)")
    add_common(p_mc)
    add_mc(p_mc)
    p_mc.add_argument("--show-trials", dest="show_trials", type=int, default=0,
                      help="print a random sample of N trial rows")
    p_mc.set_defaults(func=cmd_mc)

    # Sensitivity sweep
    p_sw = sub.add_parser("sweep", help="call/put prices across one parameter")
    add_common(p_sw)
    add_mc(p_sw)
    p_sw.add_argument("--field", choices=SWEEP_FIELDS, required=True)
    grid = p_sw.add_mutually_exclusive_group(required=True)
    grid.add_argument("--values", type=float, nargs="+")
    grid.add_argument("--linspace", type=float, nargs=3, metavar=("START", "STOP", "NUM"))
    p_sw.add_argument("--method", choices=["bs", "mc"], default="bs")
    p_sw.set_defaults(func=cmd_sweep)

    args = p.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    try:
        args.func(args)
    except PricingError as exc:
        logger.debug("command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
