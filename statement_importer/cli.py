"""Command-line interface for the statement importer."""
import click
import sys
from pathlib import Path
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn

from . import __version__
from .utils.logger import setup_logger
from .utils.currency_parser import format_currency
from .config import get_vocabulary_loader, Vocabulary, OCR_ENABLED

console = Console()
logger = setup_logger()


def _resolve_vocabulary(name):
    """Look up a named vocabulary, exiting with an error if unknown."""
    if not name:
        return Vocabulary.default()

    loader = get_vocabulary_loader()
    vocabulary = loader.get_vocabulary(name)
    if vocabulary is None:
        available = ", ".join(loader.get_all_vocabularies()) or "none"
        console.print(f"[red]Unknown vocabulary: {name} (available: {available})[/red]")
        sys.exit(1)
    return vocabulary


def _print_transactions(result) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan")
    table.add_column("Description")
    table.add_column("Category", style="green")
    table.add_column("Type")
    table.add_column("Amount", justify="right")

    for txn in result.transactions:
        amount_style = "red" if txn.type.value == "expense" else "green"
        table.add_row(
            txn.date.strftime("%Y-%m-%d"),
            txn.description,
            txn.category,
            txn.type.value,
            f"[{amount_style}]{format_currency(txn.signed_amount)}[/{amount_style}]"
        )

    console.print(table)


@click.group()
@click.version_option(version=__version__)
def cli():
    """Statement Importer - Pull transactions out of bank and card statements."""
    pass


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', type=click.Path(), help='Output file path')
@click.option('--output-dir', '-d', type=click.Path(file_okay=False), help='Write a timestamped output file into this directory')
@click.option('--format', '-f', 'export_format', type=click.Choice(['json', 'xlsx']), default='json', show_default=True, help='Output format')
@click.option('--vocabulary', '-v', help='Keyword vocabulary name (built-in default if not specified)')
@click.option('--no-ocr', is_flag=True, help='Do not fall back to OCR when no transactions are found')
@click.option('--max-pages', type=click.IntRange(min=1), help='Only read the first N pages of a PDF')
def extract(file_path, output, output_dir, export_format, vocabulary, no_ocr, max_pages):
    """
    Extract transactions from a statement.

    FILE_PATH: Path to the statement (PDF, image or extracted .txt)
    """
    from .pipeline import ImportPipeline
    from .exporters import get_exporter, generate_output_filename
    from .extractors import PDFExtractor

    console.print(f"\n[bold blue]Statement Importer[/bold blue]\n")

    file_path = Path(file_path)
    if output:
        output_path = Path(output)
    elif output_dir:
        output_path = generate_output_filename(file_path.name, export_format, output_dir=Path(output_dir))
    else:
        output_path = file_path.with_suffix(f'.{export_format}')

    console.print(f"[cyan]Processing:[/cyan] {file_path.name}")
    console.print(f"[cyan]Output:[/cyan] {output_path}")

    pipeline = ImportPipeline(
        vocabulary=_resolve_vocabulary(vocabulary),
        text_extractor=PDFExtractor(max_pages=max_pages) if max_pages else None,
        ocr_enabled=OCR_ENABLED and not no_ocr
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console
    ) as progress:
        progress.add_task("Extracting transactions...", total=None)
        result = pipeline.process(file_path)

    if not result.success:
        console.print(f"\n[red]✗ Import failed[/red]")
        console.print(f"  Error: {result.error_message}")
        sys.exit(1)

    if result.transactions:
        _print_transactions(result)

    get_exporter(export_format).export(result, output_path)

    console.print(f"\n[green]✓ Import complete[/green]")
    console.print(f"  Transactions: {result.transaction_count}")
    console.print(f"  Method: {result.extraction_method} ({result.text_confidence:.0f}% of pages had text)")
    console.print(f"  Income: {format_currency(result.total_income)}")
    console.print(f"  Expenses: {format_currency(result.total_expense)}")
    console.print(f"  Time: {result.processing_time:.2f}s")

    for warning in result.warnings:
        console.print(f"  [yellow]⚠ {warning}[/yellow]")


@cli.command(name='parse-text')
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--vocabulary', '-v', help='Keyword vocabulary name (built-in default if not specified)')
def parse_text(file_path, vocabulary):
    """Parse an extracted-text file and print transactions as JSON."""
    from .pipeline import ImportPipeline
    from .exporters import JSONExporter

    pipeline = ImportPipeline(vocabulary=_resolve_vocabulary(vocabulary), ocr_enabled=False)
    text = Path(file_path).read_text(encoding='utf-8', errors='replace')
    result = pipeline.process_text(text, source=Path(file_path).name)

    click.echo(JSONExporter().render(result))


@cli.command()
def vocabularies():
    """List keyword vocabularies."""
    console.print("\n[bold blue]Vocabularies[/bold blue]\n")

    loader = get_vocabulary_loader()

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Categories", style="green")
    table.add_column("Sections")

    default = Vocabulary.default()
    table.add_row("(default)", ", ".join(default.category_keywords), str(len(default.section_headers)))

    for name in loader.get_all_vocabularies():
        vocabulary = loader.get_vocabulary(name)
        table.add_row(name, ", ".join(vocabulary.category_keywords), str(len(vocabulary.section_headers)))

    console.print(table)

    if loader.vocabulary_count == 0:
        console.print(f"[yellow]Add YAML files to: {loader.config_dir}[/yellow]")


@cli.command()
def check():
    """Run system checks to verify installation."""
    console.print("\n[bold blue]System Check[/bold blue]\n")

    console.print("[cyan]Checking Python version...[/cyan]")
    version = sys.version_info
    if version >= (3, 10):
        console.print(f"  [green]✓[/green] Python {version.major}.{version.minor}.{version.micro}")
    else:
        console.print(f"  [red]✗[/red] Python {version.major}.{version.minor} (3.10+ required)")

    console.print("[cyan]Checking dependencies...[/cyan]")

    deps = [
        ("pdfplumber", "pdfplumber"),
        ("pdf2image", "pdf2image"),
        ("pytesseract", "pytesseract"),
        ("python-dateutil", "dateutil"),
        ("openpyxl", "openpyxl"),
        ("pyyaml", "yaml"),
    ]

    for name, import_name in deps:
        try:
            __import__(import_name)
            console.print(f"  [green]✓[/green] {name}")
        except ImportError:
            console.print(f"  [red]✗[/red] {name} (not installed)")

    console.print("[cyan]Checking Tesseract OCR...[/cyan]")
    try:
        import pytesseract
        tesseract_version = pytesseract.get_tesseract_version()
        console.print(f"  [green]✓[/green] Tesseract {tesseract_version}")
    except Exception:
        console.print(f"  [yellow]![/yellow] Tesseract not found (OCR fallback unavailable)")

    console.print("[cyan]Checking vocabularies...[/cyan]")
    loader = get_vocabulary_loader()
    console.print(f"  [green]✓[/green] {loader.vocabulary_count} vocabularies loaded")

    console.print("\n[green]System check complete[/green]\n")


def main():
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"\n[red]Error: {e}[/red]")
        logger.exception("Unhandled exception")
        sys.exit(1)


if __name__ == '__main__':
    main()
