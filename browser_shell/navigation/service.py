"""
Address-bar resolution: raw text typed by the user → Destination.

The resolver never rejects input. Anything it cannot read as an internal page,
a URL with a known scheme, or a bare host becomes a search query.
"""

import logging
from urllib.parse import quote, urlparse

from browser_shell.navigation.views import (
	INTERNAL_PAGE_NAMES,
	Destination,
	InternalDestination,
	InternalPage,
	UrlDestination,
)
from browser_shell.profile import ShellProfile

logger = logging.getLogger(__name__)

# prefixes passed through verbatim, matched case-insensitively
URL_SCHEME_PREFIXES = ('http://', 'https://', 'ftp://', 'file://', 'about:', 'data:', 'mailto:', 'tel:')

# same set of characters JavaScript's encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(text: str) -> str:
	return quote(text, safe=_URI_COMPONENT_SAFE)


def has_url_scheme(text: str) -> bool:
	return text.lower().startswith(URL_SCHEME_PREFIXES)


def display_name_for(destination: Destination) -> str:
	"""Tab strip label: fixed names for internal pages, hostname without www. for everything else"""
	if isinstance(destination, InternalDestination):
		return INTERNAL_PAGE_NAMES[destination.page]

	try:
		hostname = urlparse(destination.url).hostname
	except ValueError:
		hostname = None
	if not hostname:
		return 'Site'
	return hostname.replace('www.', '')


class AddressResolver:
	"""Turns address-bar text into a Destination using the rules of a ShellProfile"""

	def __init__(self, profile: ShellProfile | None = None):
		self.profile = profile or ShellProfile()

	def resolve(self, raw_input: str | None) -> Destination | None:
		"""
		Resolve raw address-bar text, first matching rule wins:

		1. empty / whitespace only → None, the caller ignores it
		2. chrome://<page> for an enabled internal page → InternalDestination
		3. no "." and no known scheme → search URL
		4. known scheme → the text itself
		5. anything else that looks like a host → default scheme prepended,
		   otherwise degrade to a search URL
		"""
		text = (raw_input or '').strip()
		if not text:
			return None

		internal = self._match_internal_page(text)
		if internal is not None:
			return internal

		if has_url_scheme(text):
			return UrlDestination(url=text)

		if '.' in text and self._looks_like_host(text):
			return UrlDestination(url=f'{self.profile.default_scheme}://{text}')

		return self.search_destination(text)

	def search_destination(self, query: str) -> UrlDestination:
		return UrlDestination(url=self.profile.search_template.format(query=encode_uri_component(query)))

	def _match_internal_page(self, text: str) -> InternalDestination | None:
		prefix = f'{self.profile.internal_scheme}://'
		if not text.lower().startswith(prefix):
			return None

		token = text[len(prefix) :].rstrip('/').lower()
		try:
			page = InternalPage(token)
		except ValueError:
			logger.debug(f'🔎 Unknown internal page {text!r}, treating it as a search')
			return None

		if page not in self.profile.enabled_pages:
			logger.debug(f'🔎 Internal page {page.value} is disabled in this profile, treating it as a search')
			return None

		return InternalDestination(page=page, scheme=self.profile.internal_scheme)

	@staticmethod
	def _looks_like_host(text: str) -> bool:
		if any(ch.isspace() for ch in text):
			return False
		try:
			hostname = urlparse(f'https://{text}').hostname
		except ValueError:
			return False
		return bool(hostname and hostname.strip('.'))
