import argparse
import json
import logging
import os
import sys

from git_graph_layout import layout_graph
from git_log_parser import GIT_LOG_ARGS, GIT_REF_ARGS, parse_git_log, parse_ref_listing
from graph_cells import render_text
from graph_errors import LayoutError
from graph_normalizer import normalize
from graph_paths import render_svg
from layout_config import LayoutConfig
from ref_labels import annotate_rows
from row_order import CHECK_MODES, CHECK_OFF

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d - %(message)s"


def setup_logging():
    # 根据环境变量设置日志级别
    log_level = logging.DEBUG if os.getenv("DEBUG") == "1" else logging.INFO
    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    if os.getenv("LOG_TO_FILE") == "1":
        file_handler = logging.FileHandler("commit-lanes.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(file_handler)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="commit-lanes",
        description="Lay out a commit history as lanes, like git log --graph.",
        epilog=(
            "Produce LOG_FILE with: git " + " ".join(GIT_LOG_ARGS) + "\n"
            "Produce --refs input with: git " + " ".join(GIT_REF_ARGS)
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("log_file", nargs="?", help="git log -z output (default: stdin)")
    parser.add_argument("--refs", help="git for-each-ref output used for extra branch labels")
    parser.add_argument("--config", help="JSON file with layout options (laneWidth, rowHeight, ...)")
    parser.add_argument("--format", choices=["json", "text", "svg"], default="json", dest="output_format")
    parser.add_argument("--check", choices=CHECK_MODES, default=CHECK_OFF, help="row order topology check")
    return parser


def _read(path):
    if path is None:
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def run(args, out=sys.stdout) -> int:
    try:
        config = LayoutConfig.load(args.config) if args.config else LayoutConfig()
        revisions = parse_git_log(_read(args.log_file))
        labels_by_id = parse_ref_listing(_read(args.refs)) if args.refs else {}

        graph = normalize(revisions)
        layout = layout_graph(graph, config=config, check=args.check)
    except LayoutError as e:
        logging.error("%s", e)
        return 1
    except OSError as e:
        logging.error("Cannot read input: %s", e)
        return 1

    if args.output_format == "text":
        out.write(render_text(layout.rows, layout.max_lanes, graph, labels_by_id) + "\n")
    elif args.output_format == "svg":
        out.write(render_svg(layout, config) + "\n")
    else:
        result = layout.to_dict()
        result["commits"] = annotate_rows(layout, graph, labels_by_id)
        json.dump(result, out, ensure_ascii=False, indent=2)
        out.write("\n")
    logging.info("Laid out %d revisions in %d lanes", len(layout.rows), layout.max_lanes)
    return 0


def main(argv=None):
    setup_logging()
    sys.exit(run(build_parser().parse_args(argv)))


if __name__ == "__main__":
    main()
