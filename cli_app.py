#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
DocSearch - Interactive Shell
A command shell for querying a directory of text files ranked by TF-IDF similarity
"""

import os
import re
import sys
import argparse
from typing import Callable, Dict, List, NamedTuple, Optional

# Add the project root directory to Python path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape
from rich import box

# Import DocSearch modules
from DocSearch.config import load_config
from DocSearch.exceptions import DocSearchError, EmptyQueryError
from DocSearch.main import DocSearch

SEPARATOR = "-" * 49


class Command(NamedTuple):
    name: str
    syntax: str
    description: List[str]
    handler: Callable[[Optional[str]], bool]


def extract_arguments(line: str) -> List[str]:
    """Split a line on whitespace, keeping "quoted parts" together"""
    return [quoted or plain for quoted, plain in re.findall(r'"([^"]*)"|(\S+)', line)]


class DocSearchCLI:
    def __init__(self, search: DocSearch = None, console: Console = None):
        """Initialize the CLI interface"""
        self.search = search or DocSearch()
        self.console = console or Console()
        self.commands: Dict[str, Command] = {}

        for command in [
            Command("QUERY", "query <word1> (optional: <word2>...<wordN>)",
                    ["Executes the search.",
                     "This command requires at least one argument in order to execute the search."],
                    self.do_query),
            Command("TYPE", "type <result_index>",
                    ["Displays the contents of a file.",
                     "The file is specified by the result index.",
                     "This command is expected to be executed after the query command has generated results."],
                    self.do_type),
            Command("RESULTS", "results",
                    ["Displays the previously executed search results.",
                     "This command takes no arguments.",
                     "It is expected that query was executed before this command is."],
                    self.do_results),
            Command("SETPATH", "setpath <path>",
                    ["Sets the path from which it loads textual files.",
                     "This command takes a single argument - path to directory with textual files."],
                    self.do_setpath),
            Command("HELP", "help (optional: <command>)",
                    ["Lists available commands, or describes a single command."],
                    self.do_help),
            Command("EXIT", "exit",
                    ["Exits the DocSearch shell."],
                    self.do_exit),
        ]:
            self.commands[command.name] = command

    def print_header(self):
        """Display the application header"""
        self.console.print(Panel(
            "[bold blue]DocSearch[/bold blue] [yellow]Shell[/yellow]",
            border_style="blue",
            subtitle="TF-IDF search over text files",
            width=80
        ))

    def print_syntax_error(self, command: Command):
        self.console.print(f"[bold red]Invalid syntax.[/bold red] Usage: [cyan]{command.syntax}[/cyan]")

    def print_corpus_stats(self):
        corpus = self.search.corpus
        self.console.print(f"Dictionary size: [bold]{corpus.vocabulary_size}[/bold]")
        self.console.print(f"Number of loaded documents: [bold]{corpus.document_count}[/bold]")

    def display_results(self, results):
        """Display query results as a ranked table"""
        if not results:
            self.console.print("[yellow]No documents are similar enough to the query.[/yellow]")
            return

        table = Table(
            box=box.HEAVY_EDGE,
            show_header=True,
            header_style="bold magenta",
            title="[bold]Top results are:[/bold]",
            title_style="yellow"
        )
        table.add_column("#", style="dim", width=4)
        table.add_column("Similarity", style="yellow", width=10)
        table.add_column("Path", style="cyan", no_wrap=False)

        for i, result in enumerate(results):
            # Highlight the row for the top result
            row_style = "on blue" if i == 0 else ""
            table.add_row(escape(f"[{i}]"), f"{result.similarity:.4f}", escape(result.path), style=row_style)

        self.console.print(table)

    def set_path(self, path: str) -> bool:
        """Load a directory; the previous corpus is kept on failure"""
        try:
            self.search.set_path(path)
        except (DocSearchError, NotADirectoryError) as e:
            self.console.print(f"[bold red]Error occurred while loading from {escape(path)}:[/bold red] {escape(str(e))}")
            return False

        self.console.print(f"Path set to [cyan]{escape(self.search.corpus.directory)}[/cyan]")
        self.print_corpus_stats()
        return True

    def do_query(self, arg: Optional[str]) -> bool:
        if not arg:
            self.print_syntax_error(self.commands["QUERY"])
            return True

        try:
            words = self.search.engine.query_terms(arg)
            if not words:
                raise EmptyQueryError()
            self.console.print(f"Query is: [cyan]{escape(str(words))}[/cyan]")
            results = self.search.query(arg)
        except DocSearchError as e:
            self.console.print(f"[yellow]{escape(str(e))}[/yellow]")
            return True

        self.display_results(results)
        return True

    def do_results(self, arg: Optional[str]) -> bool:
        if arg:
            self.print_syntax_error(self.commands["RESULTS"])
            return True

        try:
            self.display_results(self.search.get_results())
        except DocSearchError as e:
            self.console.print(f"[yellow]{escape(str(e))}[/yellow]")
        return True

    def do_type(self, arg: Optional[str]) -> bool:
        try:
            index = int(arg)
        except (TypeError, ValueError):
            self.print_syntax_error(self.commands["TYPE"])
            return True

        try:
            result = self.search.get_result(index)
            lines = self.search.read_result(index)
        except (DocSearchError, IndexError) as e:
            self.console.print(f"[yellow]{escape(str(e))}[/yellow]")
            return True
        except (OSError, UnicodeDecodeError) as e:
            self.console.print(f"[bold red]Error reading document:[/bold red] {escape(str(e))}")
            return True

        self.console.print(SEPARATOR)
        self.console.print(f"Document: {result.path}", markup=False)
        self.console.print(SEPARATOR)
        for line in lines:
            self.console.print(line, markup=False, highlight=False)
        self.console.print(SEPARATOR)
        return True

    def do_setpath(self, arg: Optional[str]) -> bool:
        arguments = extract_arguments(arg or "")
        if len(arguments) != 1:
            self.print_syntax_error(self.commands["SETPATH"])
            return True

        self.set_path(arguments[0])
        return True

    def do_help(self, arg: Optional[str]) -> bool:
        if arg:
            command = self.commands.get(arg.strip().upper())
            if command is None:
                self.console.print(f"[bold red]Unknown command: {escape(arg.strip())}[/bold red]")
                return True

            self.console.print(f"[bold cyan]{command.name}[/bold cyan]")
            for line in command.description:
                self.console.print(f"  {line}")
            self.console.print(f"  Usage: [cyan]{command.syntax}[/cyan]")
            return True

        menu_table = Table(show_header=False, box=box.SIMPLE)
        menu_table.add_column("Command", style="cyan")
        menu_table.add_column("Description", style="yellow")
        for name in sorted(self.commands):
            menu_table.add_row(name.lower(), self.commands[name].description[0])

        self.console.print("\n[bold cyan]Available Commands:[/bold cyan]")
        self.console.print(menu_table)
        return True

    def do_exit(self, arg: Optional[str]) -> bool:
        return False

    def execute(self, line: str) -> bool:
        """
        Execute one line of input.

        Returns:
            False when the shell should terminate
        """
        line = line.strip()
        if not line:
            return True

        parts = line.split(None, 1)
        name = parts[0].upper()
        arg = parts[1].strip() if len(parts) > 1 else None

        command = self.commands.get(name)
        if command is None:
            self.console.print("[bold red]Unknown command![/bold red]")
            return True

        if name != "SETPATH" and name != "HELP" and name != "EXIT" and self.search.corpus is None:
            self.console.print("[bold red]No directory loaded. Use setpath first.[/bold red]")
            return True

        return command.handler(arg)

    def interactive_mode(self):
        """Run the application in interactive mode"""
        self.console.print("Welcome to DocSearch! You may enter commands.")

        while True:
            try:
                line = self.console.input("[bold cyan]Enter command> [/bold cyan]")
            except EOFError:
                break

            if not self.execute(line):
                break
            self.console.print()

        self.console.print("Goodbye!")


def main():
    """Main entry point for the CLI application"""
    parser = argparse.ArgumentParser(
        description='DocSearch - Interactive TF-IDF search over a directory of text files'
    )
    parser.add_argument('--path', help='Directory with text files')
    parser.add_argument('--config', help='Path to configuration file')
    args = parser.parse_args()

    console = Console()
    try:
        search = DocSearch(config=load_config(args.config))
    except DocSearchError as e:
        console.print(f"[bold red]Error loading configuration:[/bold red] {escape(str(e))}")
        sys.exit(1)

    cli = DocSearchCLI(search=search, console=console)
    cli.print_header()

    path = args.path or console.input("[bold cyan]Enter path to directory: [/bold cyan]")
    if not path or not cli.set_path(path.replace('"', '')):
        sys.exit(1)

    console.rule(style="blue")
    cli.interactive_mode()


if __name__ == "__main__":
    main()
