"""Tests for the isolation layer builder and the policies it applies."""

import pytest
from pydantic import ValidationError

from browser_shell.isolation.documents import HANDLE_PREFIX, DocumentStore
from browser_shell.isolation.service import IsolationLayerBuilder, is_embeddable_url, render_layer_document
from browser_shell.isolation.views import (
	NESTED_CAPABILITIES,
	NESTED_LAYER_POLICY,
	RESTRICTED_POLICY,
	SINGLE_LAYER_POLICY,
	STANDARD_CAPABILITIES,
	Capability,
	InternalContent,
	IsolatedContent,
	IsolationPolicy,
	sandbox_tokens,
)
from browser_shell.navigation.views import InternalDestination, InternalPage, UrlDestination


@pytest.fixture
def documents():
	return DocumentStore()


@pytest.fixture
def builder(documents):
	return IsolationLayerBuilder(documents)


class TestIsolationPolicy:
	def test_presets(self):
		assert IsolationPolicy.preset('single') == SINGLE_LAYER_POLICY
		assert IsolationPolicy.preset(' Nested ') == NESTED_LAYER_POLICY
		assert IsolationPolicy.preset('restricted') == RESTRICTED_POLICY
		assert SINGLE_LAYER_POLICY.layer_count == 1
		assert NESTED_LAYER_POLICY.layer_count == 3

	def test_unknown_preset(self):
		with pytest.raises(ValueError, match='Unknown isolation policy'):
			IsolationPolicy.preset('paranoid')

	@pytest.mark.parametrize('layer_count', [0, -1, 17])
	def test_layer_count_bounds(self, layer_count):
		with pytest.raises(ValidationError):
			IsolationPolicy(layer_count=layer_count)

	def test_nested_capabilities_are_a_subset_of_standard(self):
		assert NESTED_CAPABILITIES < STANDARD_CAPABILITIES
		assert Capability.PRESENTATION not in NESTED_CAPABILITIES
		# inner layers can only load if scripts and same-origin survive every level
		assert {Capability.SCRIPTS, Capability.SAME_ORIGIN} <= NESTED_CAPABILITIES

	def test_sandbox_tokens_are_stable_and_skip_fullscreen(self):
		assert sandbox_tokens(STANDARD_CAPABILITIES) == (
			'allow-scripts allow-forms allow-same-origin allow-popups allow-modals allow-presentation'
		)
		assert sandbox_tokens(frozenset()) == ''


class TestEmbeddableUrl:
	@pytest.mark.parametrize(
		'url',
		['https://example.com', 'http://example.com/a', 'ftp://files.example.com', 'about:blank', 'file:///tmp/a.html'],
	)
	def test_valid(self, url):
		assert is_embeddable_url(url)

	@pytest.mark.parametrize('url', ['https://', 'http:///path', 'about:', 'mailto:someone@example.com', 'notaurl', ''])
	def test_invalid(self, url):
		assert not is_embeddable_url(url)


class TestIsolationLayerBuilder:
	def test_internal_destination_gets_no_layers(self, builder, documents):
		content = builder.build(InternalDestination(page=InternalPage.SETTINGS), NESTED_LAYER_POLICY)
		assert isinstance(content, InternalContent)
		assert content.page == InternalPage.SETTINGS
		assert content.handles == ()
		assert len(documents) == 0

	def test_single_layer(self, builder, documents):
		content = builder.build(UrlDestination(url='https://example.com'), SINGLE_LAYER_POLICY)
		assert isinstance(content, IsolatedContent)
		assert content.layer_count == 1
		assert content.policy_name == 'single'
		assert content.capabilities == STANDARD_CAPABILITIES
		assert content.degraded is False
		assert content.root.depth == 0
		assert content.root.embedded_src == 'https://example.com'
		assert content.root.inner is None
		assert len(documents) == 1

	def test_default_policy_is_single_layer(self, builder):
		content = builder.build(UrlDestination(url='https://example.com'))
		assert content.layer_count == 1

	def test_nested_layers_chain_inwards(self, builder, documents):
		content = builder.build(UrlDestination(url='https://example.com'), NESTED_LAYER_POLICY)
		layers = list(content.layers())

		assert [layer.depth for layer in layers] == [0, 1, 2]
		assert len(set(content.handles)) == 3
		assert all(handle.startswith(HANDLE_PREFIX) for handle in content.handles)
		assert len(documents) == 3

		# each layer embeds the next one, the innermost embeds the destination
		for outer, inner in zip(layers, layers[1:]):
			assert outer.embedded_src == inner.handle
		assert content.innermost.embedded_src == 'https://example.com'
		assert all(layer.capabilities == NESTED_CAPABILITIES for layer in layers)

	def test_layer_documents_embed_their_source(self, builder, documents):
		content = builder.build(UrlDestination(url='https://example.com/?a=1&b=2'), NESTED_LAYER_POLICY, title='example.com')
		for layer in content.layers():
			document = documents.read(layer.handle)
			assert f'src="{layer.embedded_src.replace("&", "&amp;")}"' in document
			assert 'sandbox="allow-scripts allow-forms allow-same-origin allow-popups allow-modals"' in document
			assert 'allowfullscreen' in document
			assert '<title>example.com</title>' in document

	@pytest.mark.parametrize('layer_count', [1, 2, 4, 8])
	def test_layer_count_follows_policy(self, builder, layer_count):
		policy = IsolationPolicy(name='custom', layer_count=layer_count)
		content = builder.build(UrlDestination(url='https://example.com'), policy)
		assert content.layer_count == layer_count
		assert len(list(content.layers())) == layer_count

	@pytest.mark.parametrize('policy', [SINGLE_LAYER_POLICY, NESTED_LAYER_POLICY, IsolationPolicy(name='custom', layer_count=5)])
	def test_policy_alone_decides_layers_and_capabilities(self, builder, policy):
		urls = ['https://example.com', 'http://bücher.de/a?b=1', 'ftp://files.example.com/pub', 'about:blank', 'file:///tmp/a.html']
		contents = [builder.build(UrlDestination(url=url), policy) for url in urls]

		assert {content.layer_count for content in contents} == {policy.layer_count}
		assert {content.capabilities for content in contents} == {policy.capabilities}
		assert not any(content.degraded for content in contents)

	def test_more_layers_never_grant_more_capabilities(self, builder):
		single = builder.build(UrlDestination(url='https://example.com'), SINGLE_LAYER_POLICY)
		nested = builder.build(UrlDestination(url='https://example.com'), NESTED_LAYER_POLICY)
		assert nested.layer_count > single.layer_count
		assert nested.capabilities <= single.capabilities

	def test_invalid_url_degrades_to_restricted_policy(self, builder, documents):
		content = builder.build(UrlDestination(url='https://'), NESTED_LAYER_POLICY)
		assert isinstance(content, IsolatedContent)
		assert content.degraded is True
		assert content.policy_name == 'restricted'
		assert content.layer_count == 1
		assert content.capabilities == frozenset()
		document = documents.read(content.root.handle)
		assert 'sandbox=""' in document
		assert 'allowfullscreen' not in document

	def test_release_revokes_every_handle(self, builder, documents):
		content = builder.build(UrlDestination(url='https://example.com'), NESTED_LAYER_POLICY)
		assert builder.release(content) == 3
		assert len(documents) == 0
		assert builder.release(content) == 0

	def test_root_document(self, builder, documents):
		content = builder.build(UrlDestination(url='https://example.com'), NESTED_LAYER_POLICY)
		assert builder.root_document(content) == documents.read(content.handles[0])


class TestRenderLayerDocument:
	def test_escapes_title_and_src(self):
		document = render_layer_document('https://example.com/"><script>', frozenset(), title='<b>x</b>')
		assert '<script>' not in document
		assert '&lt;b&gt;x&lt;/b&gt;' in document
