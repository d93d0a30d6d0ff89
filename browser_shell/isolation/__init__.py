from browser_shell.isolation.documents import DocumentStore
from browser_shell.isolation.service import IsolationLayerBuilder
from browser_shell.isolation.views import ContentDescriptor, IsolatedContent, IsolationPolicy

__all__ = ['DocumentStore', 'IsolationLayerBuilder', 'ContentDescriptor', 'IsolatedContent', 'IsolationPolicy']
