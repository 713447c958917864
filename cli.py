"""
Command-Line Interface for DummyForge

Provides commands for:
- generate: Generate records and export them
- validate: Validate a generation request file
- fields: List available field types
- countries: List known countries and calling codes
- config: Manage request presets
"""

import argparse
import sys
import logging
from pathlib import Path
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn
from rich.panel import Panel

from dummyforge.config import (
    ConfigLoader,
    ConfigValidator,
    generation_config_to_dict,
    get_default_generation_config,
    get_default_settings,
)
from dummyforge.countries import get_calling_code, list_countries
from dummyforge.engine import DataGenerator
from dummyforge.errors import DummyForgeError
from dummyforge.exporters import Exporter, write_exports
from dummyforge.field_types import FIELD_CATEGORIES
from dummyforge.utils import format_duration, setup_logging

# Setup console
console = Console()

PRESET_DESCRIPTIONS = {
    'students': 'University roster with student IDs and enrolment dates',
    'employees': 'Staff directory with employee IDs and badges',
    'customers': 'E-commerce customers with addresses and preferences',
}


def print_error(error: Exception, verbose: bool = False):
    """Render an error; typed errors show their code and resolution"""
    if isinstance(error, DummyForgeError):
        display = error.to_user_display()
        console.print(Panel(
            f"{display['message']}\n\n"
            f"[bold]Resolution:[/bold] {display['resolution']}\n"
            f"[dim]Code: {display['code']}[/dim]",
            title=f"[bold red]✗ {display['title']}[/bold red]",
            border_style="red",
        ))
        if verbose:
            console.print(f"[dim]{error}[/dim]")
    else:
        console.print(f"[bold red]✗ Error:[/bold red] {str(error)}")
        if verbose:
            console.print_exception()


class CLI:
    """Main CLI class"""

    def __init__(self):
        self.parser = self._create_parser()
        self.config_loader = ConfigLoader()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser"""
        parser = argparse.ArgumentParser(
            description="DummyForge synthetic record generator",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Generate records from a request file
  python cli.py generate --config request.yaml --format csv --format sql

  # Use a preset with a different count
  python cli.py generate --preset students --count 50 --preview 5

  # Check a request without generating
  python cli.py validate request.yaml

  # Write a starter request file
  python cli.py config create request.yaml
            """
        )

        parser.add_argument(
            '--verbose', '-v',
            action='store_true',
            help='Enable verbose output'
        )

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        # Generate command
        generate_parser = subparsers.add_parser('generate', help='Generate records')
        source = generate_parser.add_mutually_exclusive_group()
        source.add_argument('--config', '-c', help='Generation request file (YAML or JSON)')
        source.add_argument('--preset', '-p', help='Request preset')
        generate_parser.add_argument('--count', '-n', type=int, help='Number of records (overrides the request)')
        generate_parser.add_argument(
            '--format', '-f', action='append', dest='formats',
            choices=list(Exporter.FORMATS), help='Export format (repeatable)'
        )
        generate_parser.add_argument('--output-dir', '-o', help='Directory for exported files')
        generate_parser.add_argument('--filename', help='Base filename for exports')
        generate_parser.add_argument('--table-name', help='Table name for SQL export')
        generate_parser.add_argument('--seed', '-s', type=int, help='Random seed for repeatable output')
        generate_parser.add_argument('--settings', help='Application settings file')
        generate_parser.add_argument('--preview', type=int, default=0, help='Show the first N records')

        # Validate command
        validate_parser = subparsers.add_parser('validate', help='Validate a generation request')
        validate_parser.add_argument('config', help='Generation request file')

        # Fields command
        subparsers.add_parser('fields', help='List available field types')

        # Countries command
        subparsers.add_parser('countries', help='List known countries')

        # Config command
        config_parser = subparsers.add_parser('config', help='Manage request presets')
        config_subparsers = config_parser.add_subparsers(dest='config_command')

        config_subparsers.add_parser('list', help='List available presets')

        show_parser = config_subparsers.add_parser('show', help='Show preset request')
        show_parser.add_argument('preset', help='Preset name')

        create_parser = config_subparsers.add_parser('create', help='Create a starter request file')
        create_parser.add_argument('output', help='Output request file')
        create_parser.add_argument('--preset', '-p', help='Start from a preset instead of the default')

        return parser

    def run(self, args=None):
        """Run CLI"""
        args = self.parser.parse_args(args)

        log_level = logging.DEBUG if args.verbose else logging.WARNING
        setup_logging(level=log_level)

        if args.command == 'generate':
            self.cmd_generate(args)
        elif args.command == 'validate':
            self.cmd_validate(args)
        elif args.command == 'fields':
            self.cmd_fields(args)
        elif args.command == 'countries':
            self.cmd_countries(args)
        elif args.command == 'config':
            self.cmd_config(args)
        else:
            self.parser.print_help()

    def cmd_generate(self, args):
        """Generate records and export them"""
        console.print(Panel.fit(
            "🎲 [bold]Record Generation[/bold]",
            border_style="blue"
        ))

        try:
            if args.settings:
                settings = self.config_loader.load_settings(args.settings)
                setup_logging(
                    level=logging.DEBUG if args.verbose else settings.logging.level,
                    log_file=settings.logging.log_file,
                )
                console.print(f"✓ Loaded settings: {args.settings}")
            else:
                settings = get_default_settings()

            if args.config:
                config = self.config_loader.load_from_file(args.config)
                console.print(f"✓ Loaded request: {args.config}")
            elif args.preset:
                config = self.config_loader.load_preset(args.preset)
                console.print(f"✓ Loaded preset: {args.preset}")
            else:
                config = get_default_generation_config()
                console.print("✓ Using default request")

            # Override with command-line arguments
            if args.count is not None:
                config.count = args.count
            if args.seed is not None:
                settings.engine.seed = args.seed
            export = settings.export
            formats = args.formats or export.formats
            output_dir = args.output_dir or export.output_dir
            filename = args.filename or export.filename
            table_name = args.table_name or export.table_name

            generator = DataGenerator(settings=settings.engine)

            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
                console=console
            ) as progress:
                task = progress.add_task("Generating records...", total=100)

                def progress_callback(current, total):
                    progress.update(task, completed=(current / total) * 100)

                result = generator.run(config, progress_callback=progress_callback)
                progress.update(task, completed=100)

            console.print(f"✓ Generated {len(result.records):,} records in {format_duration(result.generation_time)}")

            if args.preview:
                self._print_preview(result.records[:args.preview])

            paths = write_exports(result.records, formats, output_dir, filename, table_name)
            for path in paths:
                console.print(f"✓ Saved: {path}")

            table = Table(title="Generation Summary", show_header=True)
            table.add_column("Metric", style="cyan")
            table.add_column("Value", style="green")

            table.add_row("Records Generated", f"{len(result.records):,}")
            table.add_row("Fields", str(len(config.fields)))
            table.add_row("Unique Fields", ", ".join(result.metadata['unique_fields']) or "-")
            table.add_row("Seed", str(settings.engine.seed if settings.engine.seed is not None else "Random"))
            table.add_row("Formats", ", ".join(formats))
            table.add_row("Output Directory", str(output_dir))

            console.print(table)
            console.print("\n[bold green]✓ Generation complete![/bold green]")

        except (DummyForgeError, OSError, ValueError) as e:
            print_error(e, args.verbose)
            sys.exit(1)

    @staticmethod
    def _print_preview(records):
        if not records:
            return
        table = Table(title="Preview", show_header=True)
        for col in records[0]:
            table.add_column(col, style="cyan", overflow="fold")
        for record in records:
            table.add_row(*[str(value) for value in record.values()])
        console.print(table)

    def cmd_validate(self, args):
        """Validate a generation request file"""
        console.print(Panel.fit(
            "✅ [bold]Request Validation[/bold]",
            border_style="green"
        ))

        try:
            config = self.config_loader.load_from_file(args.config)
            console.print(f"✓ Loaded request: {args.config}")

            is_valid, errors = ConfigValidator.validate(config)

            table = Table(title="Request Summary", show_header=True)
            table.add_column("Field", style="cyan")
            table.add_column("Type", style="yellow")
            table.add_column("Unique", style="green")
            for field_config in config.fields:
                table.add_row(field_config.name, field_config.type_name, "✓" if field_config.unique else "")
            console.print(table)
            console.print(f"Records: {config.count}  Location: {config.location.mode}")

            if is_valid:
                console.print("\n[bold green]✓ Request is valid[/bold green]")
            else:
                console.print(f"\n[bold red]✗ {len(errors)} problem(s) found:[/bold red]")
                for i, error in enumerate(errors, 1):
                    console.print(f"  {i}. {error}")
                sys.exit(1)

        except (DummyForgeError, OSError, ValueError) as e:
            print_error(e, args.verbose)
            sys.exit(1)

    def cmd_fields(self, args):
        """List field types by category"""
        table = Table(title="Field Types", show_header=True)
        table.add_column("Category", style="cyan")
        table.add_column("Types", style="white")

        for category, field_types in FIELD_CATEGORIES.items():
            table.add_row(category.replace('_', ' ').title(), ", ".join(ft.value for ft in field_types))

        console.print(table)

    def cmd_countries(self, args):
        """List known countries"""
        table = Table(title="Countries", show_header=True)
        table.add_column("Code", style="cyan")
        table.add_column("Name", style="white")
        table.add_column("Calling Code", style="green")

        for country in list_countries():
            calling_code = get_calling_code(country['code'])
            table.add_row(country['code'], country['name'], f"+{calling_code}" if calling_code else "-")

        console.print(table)

    def cmd_config(self, args):
        """Manage request presets"""
        console.print(Panel.fit(
            "⚙️ [bold]Configuration Management[/bold]",
            border_style="magenta"
        ))

        try:
            if args.config_command == 'list':
                presets = self.config_loader.list_presets()

                table = Table(title="Available Presets", show_header=True)
                table.add_column("Preset", style="cyan")
                table.add_column("Records", style="yellow")
                table.add_column("Description", style="white")

                for preset in presets:
                    desc = PRESET_DESCRIPTIONS.get(preset, 'Custom preset')
                    table.add_row(preset, str(self.config_loader.presets[preset].count), desc)

                console.print(table)

            elif args.config_command == 'show':
                config = self.config_loader.load_preset(args.preset)

                console.print(f"\n[bold]Preset: {args.preset}[/bold]\n")
                console.print_json(data=generation_config_to_dict(config))

            elif args.config_command == 'create':
                if args.preset:
                    config = self.config_loader.load_preset(args.preset)
                else:
                    config = get_default_generation_config()
                self.config_loader.save_config(config, Path(args.output))

                console.print(f"✓ Created request file: {args.output}")
                console.print("  Edit this file to customize fields")

            else:
                console.print("Use 'config list', 'config show <preset>', or 'config create <file>'")

        except (DummyForgeError, OSError, ValueError) as e:
            print_error(e, args.verbose)
            sys.exit(1)


def main():
    """CLI entry point"""
    cli = CLI()
    cli.run()


if __name__ == "__main__":
    main()
