"""
Isolation layering for remote destinations.

A page that refuses to render when framed usually keys that decision off the
immediate parent's origin. The builder wraps the real embed in N freshly
synthesized documents, each a separate blob-style document with no inherited
origin, so the innermost frame's parent is never the host itself.

This is best effort. It does not guarantee the remote content will render and
it is NOT a security boundary: the capability set granted to each layer is the
only thing that limits what embedded content may do.
"""

import html
import logging
from urllib.parse import urlparse

from browser_shell.isolation.documents import DocumentStore
from browser_shell.isolation.views import (
	RESTRICTED_POLICY,
	SINGLE_LAYER_POLICY,
	Capability,
	ContentDescriptor,
	InternalContent,
	IsolatedContent,
	IsolationLayer,
	IsolationPolicy,
	sandbox_tokens,
)
from browser_shell.navigation.views import Destination, InternalDestination
from browser_shell.utils import _log_pretty_url, time_execution_sync

logger = logging.getLogger(__name__)

# schemes that must carry a hostname to be embeddable
HOST_SCHEMES = frozenset({'http', 'https', 'ftp'})
# schemes that are embeddable without a hostname but need something after the colon
OPAQUE_SCHEMES = frozenset({'file', 'about', 'data'})

LAYER_DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html style="height:100%; margin:0; padding:0;">
	<head>
		<meta charset="utf-8">
		<title>{title}</title>
		<style>
			body, html {{ margin: 0; padding: 0; width: 100%; height: 100%; overflow: hidden; background: #fff; }}
			iframe {{ width: 100%; height: 100%; border: none; }}
		</style>
	</head>
	<body>
		<iframe src="{src}" sandbox="{sandbox}"{fullscreen}></iframe>
	</body>
</html>
"""


def is_embeddable_url(url: str) -> bool:
	"""Basic URL validation: known scheme, and a hostname where the scheme needs one"""
	try:
		parsed = urlparse(url)
	except ValueError:
		return False

	scheme = parsed.scheme.lower()
	if scheme in HOST_SCHEMES:
		try:
			return bool(parsed.hostname)
		except ValueError:
			return False
	if scheme in OPAQUE_SCHEMES:
		return bool(url.split(':', 1)[1].strip('/'))
	return False


def render_layer_document(src: str, capabilities: frozenset[Capability], title: str = '') -> str:
	return LAYER_DOCUMENT_TEMPLATE.format(
		title=html.escape(title),
		src=html.escape(src, quote=True),
		sandbox=sandbox_tokens(capabilities),
		fullscreen=' allowfullscreen' if Capability.FULLSCREEN in capabilities else '',
	)


class IsolationLayerBuilder:
	"""Builds ContentDescriptors, allocating one DocumentStore handle per isolation layer"""

	def __init__(self, documents: DocumentStore | None = None):
		self.documents = documents if documents is not None else DocumentStore()

	@time_execution_sync('--build_isolation')
	def build(self, destination: Destination, policy: IsolationPolicy | None = None, title: str = '') -> ContentDescriptor:
		"""
		Build the content descriptor for a destination.

		Internal pages are trusted and rendered natively, so they get no layers.
		Remote URLs get policy.layer_count nested documents, built innermost first,
		each one embedding the next with the same capability set. A URL that fails
		basic validation degrades to a single restricted layer instead of failing.

		The caller owns every handle in the returned descriptor and must revoke
		them through release() once the descriptor is replaced or its tab closes.
		"""
		if isinstance(destination, InternalDestination):
			return InternalContent(page=destination.page)

		policy = policy or SINGLE_LAYER_POLICY
		degraded = False
		if not is_embeddable_url(destination.url):
			logger.warning(f'⚠️ {_log_pretty_url(destination.url, 60)!r} failed URL validation, using the restricted policy')
			policy = RESTRICTED_POLICY
			degraded = True

		src = destination.url
		inner: IsolationLayer | None = None
		for depth in reversed(range(policy.layer_count)):
			handle = self.documents.create(render_layer_document(src, policy.capabilities, title))
			inner = IsolationLayer(
				depth=depth,
				handle=handle.url,
				embedded_src=src,
				capabilities=policy.capabilities,
				inner=inner,
			)
			src = handle.url

		assert inner is not None, 'IsolationPolicy.layer_count must be >= 1'
		logger.debug(f'🧱 Built {policy.layer_count} isolation layer(s) [{policy.name}] for {_log_pretty_url(destination.url)}')

		return IsolatedContent(
			final_url=destination.url,
			layer_count=policy.layer_count,
			capabilities=policy.capabilities,
			policy_name=policy.name,
			root=inner,
			degraded=degraded,
		)

	def release(self, content: ContentDescriptor) -> int:
		"""Revoke every handle a descriptor owns, returns how many were still live"""
		return self.documents.revoke_all(content.handles)

	def root_document(self, content: IsolatedContent) -> str:
		return self.documents.read(content.root.handle)
