"""convaudit CLI: entry-point for scraping and auditing pages.

Usage:
    python cli/main.py --help

Commands:
    scrape    → print the extracted signal record
    preview   → heuristic score, no model call
    report    → full model-backed conversion audit
    copy      → rewritten headline / CTA suggestions
    serve     → run the HTTP API
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from convaudit.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json

import typer

from convaudit.logging_utils import setup_logging
from convaudit.scraper import ScrapedPage, ScrapeError, scrape_page
from convaudit.validation import InvalidUrl, validate_url

app = typer.Typer(
    name="convaudit",
    help="Landing-page conversion audit CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr."),
) -> None:
    """Configure logging before any command runs."""
    setup_logging("info" if verbose else "warning")


def _scrape_or_exit(url: str, tag: str) -> ScrapedPage:
    """Validate and scrape *url*; print the error and exit 1 on failure."""
    try:
        target = validate_url(url)
        typer.echo(f"[{tag}] Fetching {target!r} …")
        return scrape_page(target)
    except (InvalidUrl, ScrapeError) as exc:
        typer.echo(f"[{tag}] ❌ {exc}")
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Scrape commands
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape(
    url: str = typer.Option(..., help="URL to scrape (scheme optional)."),
    as_json: bool = typer.Option(False, "--json", help="Print the record as JSON."),
) -> None:
    """Scrape a URL and print the extracted conversion signals."""
    page = _scrape_or_exit(url, "scrape")
    if as_json:
        typer.echo(json.dumps(page.to_dict(), indent=2, ensure_ascii=False))
        return

    typer.echo(f"[scrape] Title  : {page.title or '(none)'}")
    typer.echo(f"[scrape] H1     : {page.h1 or '(none)'}")
    typer.echo(f"[scrape] Meta   : {page.meta_description or '(none)'}")
    typer.echo(f"[scrape] H2s    : {len(page.h2_list)}")
    for heading in page.h2_list:
        typer.echo(f"    - {heading}")
    typer.echo(f"[scrape] CTAs   : {len(page.cta_texts)}")
    for cta in page.cta_texts:
        typer.echo(f"    - {cta}")
    typer.echo(f"[scrape] Words  : {len(page.main_text.split())}")
    typer.echo("")
    typer.echo(page.main_text)


@app.command("preview")
def preview(
    url: str = typer.Option(..., help="URL to preview (scheme optional)."),
) -> None:
    """Score a page with structural heuristics only (no model call)."""
    from convaudit.analysis import build_preview

    page = _scrape_or_exit(url, "preview")
    result = build_preview(page)
    typer.echo(f"[preview] Score  : {result.score}/100")
    if not result.issues:
        typer.echo("[preview] No structural issues found.")
        return
    for issue in result.issues:
        typer.echo(f"  [{issue.impact}] {issue.category}: {issue.issue}")


# ---------------------------------------------------------------------------
# Analysis commands
# ---------------------------------------------------------------------------
@app.command("report")
def report(
    url: str = typer.Option(..., help="URL to audit (scheme optional)."),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON."),
) -> None:
    """Run the full model-backed conversion audit on a URL."""
    from convaudit.analysis import AnalysisError, analyze_page

    page = _scrape_or_exit(url, "report")
    typer.echo("[report] Analysing …")
    try:
        result = analyze_page(page)
    except AnalysisError as exc:
        typer.echo(f"[report] ❌ {exc}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return

    typer.echo("\n" + "=" * 72)
    typer.echo(f"Score: {result.score}/10")
    typer.echo(result.summary)
    typer.echo("-" * 72)
    for item in result.audit_items:
        typer.echo(f"{item.status} {item.category}")
        if item.analysis:
            typer.echo(f"    {item.analysis}")
        if item.fix:
            typer.echo(f"    Fix: {item.fix}")
    if result.quick_wins:
        typer.echo("-" * 72)
        typer.echo("Quick wins:")
        for win in result.quick_wins:
            typer.echo(f"  - {win}")
    typer.echo("=" * 72)


@app.command("copy")
def copy_cmd(
    url: str = typer.Option(..., help="URL to rewrite copy for (scheme optional)."),
) -> None:
    """Suggest rewritten headlines and CTAs for a URL."""
    from convaudit.analysis import AnalysisError, generate_copy

    page = _scrape_or_exit(url, "copy")
    typer.echo("[copy] Generating …")
    try:
        result = generate_copy(page)
    except AnalysisError as exc:
        typer.echo(f"[copy] ❌ {exc}")
        raise typer.Exit(1)

    typer.echo("Headlines:")
    for headline in result.headlines:
        typer.echo(f"  - {headline.option}  ({headline.tag})")
    typer.echo("Primary CTAs:")
    for cta in result.ctas.primary:
        typer.echo(f"  - {cta}")
    if result.placement:
        typer.echo(f"Placement: {result.placement}")


# ---------------------------------------------------------------------------
# API server
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind."),
    port: int = typer.Option(8000, help="Port to listen on."),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("convaudit.api.app:app", host=host, port=port)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
