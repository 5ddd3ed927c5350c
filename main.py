import argparse
import logging
import sys
from pathlib import Path

from fuzzyfolio.config import PROGRESS_TARGET
from fuzzyfolio.dashboard_engine import DashboardEngine
from fuzzyfolio.enums import ExportFormat, Model
from fuzzyfolio.export_engine import ExportEngine
from fuzzyfolio.response_generator import ResponseGenerator
from fuzzyfolio.session_context import SessionContext
from fuzzyfolio.simulation_engine import get_portfolios
from fuzzyfolio.topsis_engine import TopsisEngine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rank portfolio models by TOPSIS over the simulated population.",
    )
    parser.add_argument("--return", dest="w_return", type=float, help="return weight (0-1)")
    parser.add_argument("--variance", dest="w_variance", type=float, help="variance weight (0-1)")
    parser.add_argument("--entropy", dest="w_entropy", type=float, help="entropy weight (0-1)")
    parser.add_argument(
        "--models", nargs="+", metavar="MODEL",
        help="models to include in exports (default: M1 M3 M6 M7_Cloud M7_Best)",
    )
    parser.add_argument("--window", type=int, help="rolling window in months (12-36)")
    parser.add_argument("--export", choices=[f.value for f in ExportFormat])
    parser.add_argument("--output", help="export path (default: fuzzyfolio_<N>_portfolios.<fmt>)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        context = SessionContext()
        if args.window is not None:
            context.set_window_size(args.window)
        for key, value in (("return", args.w_return),
                           ("variance", args.w_variance),
                           ("entropy", args.w_entropy)):
            if value is not None:
                context.set_weight(key, value)
        if args.models:
            context.enabled_models = [Model.parse(m) for m in args.models]

        portfolios = get_portfolios()
        rankings = TopsisEngine.rank(portfolios, context.weights)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    out = ResponseGenerator()
    stats = DashboardEngine.headline_stats(portfolios, rankings)

    print("FuzzyFolio: Efficient Frontier Lab\n")
    print(out.progress(
        len(portfolios), PROGRESS_TARGET,
        DashboardEngine.simulation_progress(len(portfolios)),
    ))
    print(out.stats(stats))
    print()
    print(out.weights_banner(context.weights))
    print(out.leaderboard(rankings))

    if args.export:
        selected = DashboardEngine.filter_models(portfolios, context.enabled_models)
        text = ExportEngine.serialize(selected, args.export)
        path = Path(args.output or ExportEngine.export_filename(len(portfolios), args.export))
        path.write_text(text, encoding="utf-8")
        print("\n" + out.export_written(str(path), len(selected), args.export))

    return 0


if __name__ == "__main__":
    sys.exit(main())
