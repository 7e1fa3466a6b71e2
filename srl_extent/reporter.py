import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from srl_extent.pipeline import SentenceResult

logger = logging.getLogger(__name__)


def build_table(result: SentenceResult) -> Table:
    table = Table(title=f"sent {escape(result.sent_id)}", title_justify="left", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Predicate", style="bold cyan")
    table.add_column("Frame", style="magenta")
    table.add_column("Role", style="green")
    table.add_column("Extent")

    for pred in result.predicates.values():
        if not pred.roles:
            table.add_row(str(pred.index + 1), escape(pred.word), escape(pred.frame), "-", "")
            continue
        for role, span in sorted(pred.roles.items()):
            table.add_row(str(pred.index + 1), escape(pred.word), escape(pred.frame), role, escape(span))
    return table


def print_results(results: List[SentenceResult], summary: Dict[str, int], console: Optional[Console] = None):
    """Человекочитаемый вывод: по таблице на предложение + сводка."""
    console = console or Console()

    for res in results:
        console.print(f"[bold]{escape(' '.join(res.words))}[/bold]", highlight=False)
        if not res.ok:
            console.print(f"[red]❌ {escape(res.error)}[/red]", highlight=False)
            continue
        console.print(build_table(res))
        if res.profile:
            console.print(f"[dim]profile: {escape(str(res.profile))}[/dim]", highlight=False)
        console.print()

    console.print(
        f"[bold green]✅ {summary['sentences']} sentences[/bold green], "
        f"{summary['predicates']} predicates, {summary['roles']} extents, "
        f"[red]{summary['failed']} failed[/red]"
    )


def write_json(results: List[SentenceResult], summary: Dict[str, int], output_file: Union[str, Path]) -> Path:
    output_file = Path(output_file)
    logger.info(f"Saving extents for {len(results)} sentences to {output_file}...")

    payload = {
        "summary": summary,
        "sentences": [r.to_dict() for r in results],
    }
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)

    return output_file
