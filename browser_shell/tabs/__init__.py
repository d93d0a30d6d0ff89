from browser_shell.tabs.service import TabStore
from browser_shell.tabs.views import TabInfo, TabState

__all__ = ['TabStore', 'TabInfo', 'TabState']
