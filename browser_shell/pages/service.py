import html
import logging
from collections.abc import Callable

from browser_shell.bookmarks.service import MAX_SHORTCUTS
from browser_shell.exceptions import PageNotAvailableError
from browser_shell.navigation.views import INTERNAL_PAGE_NAMES, InternalDestination, InternalPage
from browser_shell.pages.views import InternalPageView, PageLink, ShellSnapshot
from browser_shell.profile import ShellProfile

logger = logging.getLogger(__name__)

BUNDLED_EXTENSIONS = (
	('Google Docs Offline', '1.4', 'Get things done offline with the Google Docs family of products.'),
	('Chrome PDF Viewer', '1.0', 'A built-in extension to view PDF files.'),
)

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
	<meta charset="utf-8">
	<title>{title}</title>
</head>
<body class="internal-page internal-page--{page}">
	<header><h1>{title}</h1></header>
	<main>
{body}
	</main>
</body>
</html>
"""


def _list_items(rows: list[str]) -> str:
	return '\n'.join(f'\t\t\t<li>{row}</li>' for row in rows)


class InternalPageRouter:
	"""Renders chrome:// pages from read-only shell snapshots"""

	def __init__(self, profile: ShellProfile | None = None):
		self.profile = profile or ShellProfile()
		self._renderers: dict[InternalPage, Callable[[ShellSnapshot], tuple[str, list[PageLink]]]] = {
			InternalPage.NEW_TAB: self._render_new_tab,
			InternalPage.SETTINGS: self._render_settings,
			InternalPage.EXTENSIONS: self._render_extensions,
			InternalPage.BOOKMARKS: self._render_bookmarks,
			InternalPage.HISTORY: self._render_history,
		}

	def render(self, page: InternalPage, snapshot: ShellSnapshot | None = None) -> InternalPageView:
		if page not in self.profile.enabled_pages:
			raise PageNotAvailableError(f'Internal page {page.value} is disabled in {self.profile}')

		snapshot = snapshot or ShellSnapshot()
		title = INTERNAL_PAGE_NAMES[page]
		body, links = self._renderers[page](snapshot)
		logger.debug(f'📄 Rendered internal page {page.value} with {len(links)} link(s)')
		return InternalPageView(
			page=page,
			title=title,
			html=PAGE_TEMPLATE.format(title=html.escape(title), page=page.value, body=body),
			links=tuple(links),
		)

	def _href(self, page: InternalPage) -> str:
		return InternalDestination(page=page, scheme=self.profile.internal_scheme).href

	def _render_new_tab(self, snapshot: ShellSnapshot) -> tuple[str, list[PageLink]]:
		links = [PageLink(label=b.name, href=b.href) for b in snapshot.bookmarks[:MAX_SHORTCUTS]]
		if InternalPage.BOOKMARKS in self.profile.enabled_pages:
			links.append(PageLink(label='Add shortcut', href=self._href(InternalPage.BOOKMARKS), action='open'))

		rows = [f'<a href="{html.escape(link.href)}">{html.escape(link.label)}</a>' for link in links]
		body = (
			'\t\t<input type="text" placeholder="Search Google or type a URL">\n'
			f'\t\t<ul class="shortcuts">\n{_list_items(rows)}\n\t\t</ul>'
		)
		return body, links

	def _render_settings(self, snapshot: ShellSnapshot) -> tuple[str, list[PageLink]]:
		body = (
			f'\t\t<h2>About {html.escape(self.profile.product_name)}</h2>\n'
			f'\t\t<p>Version {html.escape(self.profile.product_version)}</p>\n'
			f'\t\t<p>{html.escape(self.profile.product_name)} is up to date.</p>\n'
			f'\t\t<p>Isolation policy: {html.escape(self.profile.isolation_policy.name)} '
			f'({self.profile.isolation_policy.layer_count} layer(s))</p>'
		)
		return body, []

	def _render_extensions(self, snapshot: ShellSnapshot) -> tuple[str, list[PageLink]]:
		rows = [
			f'<h3>{html.escape(name)} <span class="version">{html.escape(version)}</span></h3><p>{html.escape(description)}</p>'
			for name, version, description in BUNDLED_EXTENSIONS
		]
		return f'\t\t<ul class="extensions">\n{_list_items(rows)}\n\t\t</ul>', []

	def _render_bookmarks(self, snapshot: ShellSnapshot) -> tuple[str, list[PageLink]]:
		if not snapshot.bookmarks:
			return '\t\t<p>No bookmarks yet.</p>', []

		links: list[PageLink] = []
		rows = []
		for bookmark in snapshot.bookmarks:
			open_link = PageLink(label=bookmark.name, href=bookmark.href)
			delete_link = PageLink(label='Delete', href=bookmark.href, action='remove')
			links += [open_link, delete_link]
			rows.append(
				f'<a href="{html.escape(bookmark.href)}">{html.escape(bookmark.name)}</a> '
				f'<small>{html.escape(bookmark.href)}</small> '
				f'<button data-action="remove" data-href="{html.escape(bookmark.href)}">Delete</button>'
			)
		return f'\t\t<h2>All Bookmarks</h2>\n\t\t<ul class="bookmarks">\n{_list_items(rows)}\n\t\t</ul>', links

	def _render_history(self, snapshot: ShellSnapshot) -> tuple[str, list[PageLink]]:
		if not snapshot.history:
			return '\t\t<p>No history yet.</p>', []

		links = [PageLink(label=entry.display_name, href=entry.href) for entry in snapshot.history]
		links.append(PageLink(label='Clear History', href=self._href(InternalPage.HISTORY), action='clear'))
		rows = [
			f'<time>{entry.timestamp.isoformat(timespec="seconds")}</time> '
			f'<a href="{html.escape(entry.href)}">{html.escape(entry.display_name)}</a>'
			for entry in snapshot.history
		]
		return (
			'\t\t<h2>Recent History</h2>\n'
			'\t\t<button data-action="clear">Clear History</button>\n'
			f'\t\t<ul class="history">\n{_list_items(rows)}\n\t\t</ul>'
		), links
