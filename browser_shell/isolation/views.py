from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from browser_shell.navigation.views import InternalPage


class Capability(StrEnum):
	"""Closed set of permissions granted to embedded content, values are iframe sandbox tokens"""

	SCRIPTS = 'allow-scripts'
	FORMS = 'allow-forms'
	SAME_ORIGIN = 'allow-same-origin'
	POPUPS = 'allow-popups'
	MODALS = 'allow-modals'
	PRESENTATION = 'allow-presentation'
	FULLSCREEN = 'fullscreen'  # not a sandbox token, rendered as the allowfullscreen attribute


# Capability set A
STANDARD_CAPABILITIES = frozenset(
	{
		Capability.SCRIPTS,
		Capability.FORMS,
		Capability.SAME_ORIGIN,
		Capability.POPUPS,
		Capability.MODALS,
		Capability.PRESENTATION,
		Capability.FULLSCREEN,
	}
)

# Capability set B, every layer must keep scripts + same-origin or the next layer never loads
NESTED_CAPABILITIES = frozenset(
	{
		Capability.SCRIPTS,
		Capability.FORMS,
		Capability.SAME_ORIGIN,
		Capability.POPUPS,
		Capability.MODALS,
		Capability.FULLSCREEN,
	}
)

RESTRICTED_CAPABILITIES: frozenset[Capability] = frozenset()


def sandbox_tokens(capabilities: frozenset[Capability]) -> str:
	"""Space separated sandbox attribute value, in enum order so output is stable"""
	return ' '.join(cap.value for cap in Capability if cap in capabilities and cap is not Capability.FULLSCREEN)


class IsolationPolicy(BaseModel):
	"""How many isolation layers to interpose and what each one grants, chosen by configuration only"""

	model_config = ConfigDict(frozen=True)

	name: str = 'custom'
	layer_count: int = Field(default=1, ge=1, le=16)
	capabilities: frozenset[Capability] = STANDARD_CAPABILITIES

	@classmethod
	def preset(cls, name: str) -> IsolationPolicy:
		try:
			return ISOLATION_PRESETS[name.strip().lower()]
		except KeyError:
			raise ValueError(f'Unknown isolation policy {name!r}, expected one of: {", ".join(ISOLATION_PRESETS)}') from None


SINGLE_LAYER_POLICY = IsolationPolicy(name='single', layer_count=1, capabilities=STANDARD_CAPABILITIES)
NESTED_LAYER_POLICY = IsolationPolicy(name='nested', layer_count=3, capabilities=NESTED_CAPABILITIES)
RESTRICTED_POLICY = IsolationPolicy(name='restricted', layer_count=1, capabilities=RESTRICTED_CAPABILITIES)

ISOLATION_PRESETS: dict[str, IsolationPolicy] = {
	policy.name: policy for policy in (SINGLE_LAYER_POLICY, NESTED_LAYER_POLICY, RESTRICTED_POLICY)
}


class IsolationLayer(BaseModel):
	"""One synthesized document in the isolation chain, owning the layer nested inside it"""

	model_config = ConfigDict(frozen=True)

	depth: int  # 0 = outermost, the document the host renders
	handle: str  # DocumentStore handle this layer's document lives at
	embedded_src: str  # what this layer's iframe points at: the inner layer's handle, or the remote URL
	capabilities: frozenset[Capability]
	inner: IsolationLayer | None = None


class InternalContent(BaseModel):
	model_config = ConfigDict(frozen=True)

	kind: Literal['internal'] = 'internal'
	page: InternalPage

	@property
	def handles(self) -> tuple[str, ...]:
		return ()


class IsolatedContent(BaseModel):
	"""Rendering instructions for a remote destination: a chain of layer_count nested documents"""

	model_config = ConfigDict(frozen=True)

	kind: Literal['isolated'] = 'isolated'
	final_url: str
	layer_count: int = Field(ge=1)
	capabilities: frozenset[Capability]
	policy_name: str
	root: IsolationLayer
	degraded: bool = False  # destination failed validation, restricted fallback was used

	def layers(self) -> Iterator[IsolationLayer]:
		"""Walk the chain from the outermost layer inwards"""
		layer: IsolationLayer | None = self.root
		while layer is not None:
			yield layer
			layer = layer.inner

	@property
	def innermost(self) -> IsolationLayer:
		*_, last = self.layers()
		return last

	@property
	def handles(self) -> tuple[str, ...]:
		return tuple(layer.handle for layer in self.layers())


ContentDescriptor = Annotated[InternalContent | IsolatedContent, Field(discriminator='kind')]
