import logging
import os
import shlex
from pathlib import Path

import click

os.environ.setdefault('BROWSER_SHELL_LOGGING_LEVEL', 'result')

from browser_shell.exceptions import BrowserShellError
from browser_shell.profile import ShellProfile
from browser_shell.shell.service import ShellController
from browser_shell.utils import get_browser_shell_version

HELP_TEXT = """Commands:
  go <text>       navigate the active tab (search terms, hosts, URLs, chrome://pages)
  open [text]     open a new tab, on the new tab page by default
  close [n]       close tab n, or the active tab
  select <n>      switch to tab n
  reload          rebuild the active tab's content
  bookmark        star / un-star the active tab
  tabs            list tabs
  history [q]     list history, newest first, optionally filtered
  clear-history   forget every history entry
  bookmarks       list bookmarks
  save [dir]      save the active tab offline
  show            print the active tab's rendered document
  help            this text
  quit            exit"""


def _tab_id_at(shell: ShellController, position: str) -> str | None:
	"""Translate a 1-based tab strip position into a tab id"""
	try:
		index = int(position) - 1
	except ValueError:
		return None
	tabs = shell.tabs.tabs
	return tabs[index].id if 0 <= index < len(tabs) else None


def format_tabs(shell: ShellController) -> str:
	lines = []
	for position, tab in enumerate(shell.tabs.tabs, start=1):
		marker = '*' if tab.is_active else ' '
		layers = f'{tab.content.layer_count} layer(s)' if tab.content.kind == 'isolated' else 'internal'
		lines.append(f'{marker} {position}. {tab.display_name:<20} {tab.href}  [{layers}]')
	return '\n'.join(lines)


def run_command(shell: ShellController, line: str) -> str | None:
	"""Execute one command line against the shell. Returns the text to print, or None to quit."""
	try:
		parts = shlex.split(line)
	except ValueError:
		parts = line.split()
	if not parts:
		return ''

	command, args = parts[0].lower(), parts[1:]
	rest = ' '.join(args)

	if command in ('quit', 'exit', 'q'):
		return None
	if command == 'help':
		return HELP_TEXT
	if command == 'go':
		shell.submit_address(rest)
		return format_tabs(shell)
	if command == 'open':
		shell.new_tab(rest or None)
		return format_tabs(shell)
	if command == 'close':
		tab_id = _tab_id_at(shell, args[0]) if args else shell.tabs.active_id
		if tab_id is None:
			return f'No tab at position {rest}'
		shell.close_tab(tab_id)
		return format_tabs(shell)
	if command == 'select':
		tab_id = _tab_id_at(shell, args[0]) if args else None
		if tab_id is None:
			return f'No tab at position {rest}'
		shell.select_tab(tab_id)
		return format_tabs(shell)
	if command == 'reload':
		shell.reload()
		return format_tabs(shell)
	if command == 'bookmark':
		return '★ Bookmarked' if shell.toggle_bookmark() else '☆ Bookmark removed'
	if command == 'tabs':
		return format_tabs(shell)
	if command == 'history':
		entries = shell.history.entries(query=rest or None)
		return '\n'.join(f'{e.timestamp:%H:%M:%S} {e.display_name:<20} {e.href}' for e in entries) or 'No history yet.'
	if command == 'clear-history':
		shell.clear_history()
		return '🧹 History cleared'
	if command == 'bookmarks':
		return '\n'.join(f'{b.name:<20} {b.href}' for b in shell.bookmarks) or 'No bookmarks yet.'
	if command == 'save':
		file_path = shell.save_offline(Path(rest).expanduser() if rest else None)
		return f'Saved to {file_path}'
	if command == 'show':
		stage = shell.render_active()
		return stage.document if stage else ''

	return f'Unknown command {command!r}, type "help" for a list of commands'


@click.command()
@click.option('--version', is_flag=True, help='Print version and exit')
@click.option(
	'--policy',
	type=click.Choice(['single', 'nested'], case_sensitive=False),
	help='Isolation policy for remote pages (default: from config.json / BROWSER_SHELL_ISOLATION_POLICY)',
)
@click.option('--debug', is_flag=True, help='Enable verbose logging')
@click.option('-c', '--command', 'commands', multiple=True, help='Run a command and exit, can be repeated')
@click.pass_context
def main(ctx: click.Context, version: bool, policy: str | None, debug: bool, commands: tuple[str, ...]):
	"""Multi-tab browser shell simulator"""
	if version:
		click.echo(get_browser_shell_version())
		ctx.exit(0)

	if debug:
		os.environ['BROWSER_SHELL_LOGGING_LEVEL'] = 'debug'
		browser_shell_logger = logging.getLogger('browser_shell')
		browser_shell_logger.setLevel(logging.DEBUG)
		for handler in browser_shell_logger.handlers:
			handler.setLevel(logging.DEBUG)

	overrides = {'isolation_policy': policy} if policy else {}
	shell = ShellController(ShellProfile.from_config(**overrides)).start()

	if commands:
		for line in commands:
			output = _run_and_report(shell, line)
			if output is None:
				break
			if output:
				click.echo(output)
		return

	click.echo(format_tabs(shell))
	while True:
		try:
			line = click.prompt(shell.address_text or '>', default='', show_default=False, prompt_suffix=' ❯ ')
		except (EOFError, click.Abort):
			break
		output = _run_and_report(shell, line)
		if output is None:
			break
		if output:
			click.echo(output)


def _run_and_report(shell: ShellController, line: str) -> str | None:
	"""run_command, with shell and filesystem errors echoed to stderr instead of ending the session"""
	try:
		return run_command(shell, line)
	except (BrowserShellError, OSError) as e:
		click.echo(f'❌ {type(e).__name__}: {e}', err=True)
		return ''


if __name__ == '__main__':
	main()
