import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from srl_extent.config import DEFAULT_CONFIG_PATH, FORMATS_CONFIG, SINGLETON_POLICIES, load_config
from srl_extent.pipeline import ExtentPipeline
from srl_extent.reporter import print_results, write_json

logger = logging.getLogger(__name__)

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="srl-extent",
        description="Восстановление полных спанов аргументов (A0/A1) по головам из SRL-разметки."
    )
    parser.add_argument("input", type=Path, help="Файл разметки (CoNLL-2008/2009, TSV)")
    parser.add_argument("--config", type=Path, default=None, help="YAML-конфиг (по умолчанию config/extractor.yaml)")
    parser.add_argument("--format", choices=sorted(FORMATS_CONFIG), default=None)
    parser.add_argument("--roles", nargs="+", default=None, help="Роли для извлечения, например: A0 A1 A2")
    parser.add_argument("--singleton-policy", choices=SINGLETON_POLICIES, default=None)
    parser.add_argument("--lenient", action="store_true", help="Не требовать ровно один корень в предложении")
    parser.add_argument("--profile", action="store_true", default=None, help="Добавить диагностику дерева")
    parser.add_argument("--fail-fast", action="store_true", default=None, help="Остановиться на первой ошибке")
    parser.add_argument("--json", type=Path, default=None, dest="json_output", help="Сохранить результат в JSON")
    parser.add_argument("--quiet", action="store_true", help="Не печатать таблицы")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    if not args.input.exists():
        console.print(f"[bold red]❌ File {args.input} not found![/]")
        return 1

    config_path = args.config
    if config_path is None and DEFAULT_CONFIG_PATH.exists():
        config_path = DEFAULT_CONFIG_PATH

    cfg = load_config(
        config_path,
        format=args.format,
        roles=args.roles,
        singleton_policy=args.singleton_policy,
        validation_level="lenient" if args.lenient else None,
        profile=args.profile,
        fail_fast=args.fail_fast,
    )

    pipeline = ExtentPipeline(cfg)
    results = pipeline.process_file(args.input, progress=sys.stderr.isatty())
    summary = pipeline.summary(results)

    if not args.quiet:
        print_results(results, summary, console)

    if args.json_output:
        write_json(results, summary, args.json_output)
        console.print(f"\n💾 Report saved to {args.json_output}")

    return 0 if summary["failed"] == 0 else 2


if __name__ == "__main__":
    sys.exit(main())
