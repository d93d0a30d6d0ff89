"""Tests for the shell controller wiring user commands to the tab store."""

from browser_shell.isolation.views import NESTED_LAYER_POLICY
from browser_shell.navigation.views import InternalPage
from browser_shell.pages.views import PageLink
from browser_shell.profile import ShellProfile
from browser_shell.shell.service import ShellController


class TestShellController:
	def test_start_opens_new_tab_page(self, shell):
		assert len(shell.tabs) == 1
		assert shell.address_text == 'chrome://new-tab'

	def test_submit_address_navigates_active_tab(self, shell):
		tab = shell.submit_address('example.com')

		assert len(shell.tabs) == 1
		assert tab.href == 'https://example.com'
		assert shell.address_text == 'https://example.com'
		assert [e.href for e in shell.history.entries()] == ['https://example.com']

	def test_submit_uses_current_address_text(self, shell):
		shell.address_text = 'cats'
		tab = shell.submit_address()
		assert tab.href == 'https://www.google.com/search?q=cats&igu=1'

	def test_submit_blank_keeps_tab(self, shell):
		before = shell.tabs.snapshot()
		assert shell.submit_address('  ') is None
		assert shell.tabs.snapshot() == before

	def test_submit_without_tabs_opens_one(self):
		shell = ShellController(ShellProfile())
		tab = shell.submit_address('example.com')
		assert len(shell.tabs) == 1
		assert shell.tabs.active_id == tab.id

	def test_address_bar_follows_active_tab(self, shell):
		first_id = shell.tabs.active_id
		shell.new_tab('example.com')
		assert shell.address_text == 'https://example.com'

		shell.select_tab(first_id)
		assert shell.address_text == 'chrome://new-tab'

	def test_close_tab_defaults_to_active(self, shell):
		first_id = shell.tabs.active_id
		shell.new_tab('example.com')
		shell.close_tab()

		assert shell.tabs.active_id == first_id
		assert shell.address_text == 'chrome://new-tab'

	def test_close_last_tab_leaves_new_tab_page(self, shell):
		shell.submit_address('example.com')
		shell.close_tab()
		assert len(shell.tabs) == 1
		assert shell.address_text == 'chrome://new-tab'
		assert len(shell.documents) == 0

	def test_reload(self):
		shell = ShellController(ShellProfile(isolation_policy=NESTED_LAYER_POLICY)).start()
		tab = shell.submit_address('example.com')
		reloaded = shell.reload()
		assert reloaded.href == tab.href
		assert reloaded.handles != tab.handles
		assert len(shell.documents) == 3

	def test_toggle_bookmark(self, shell):
		shell.submit_address('example.com')
		assert not shell.is_current_bookmarked

		assert shell.toggle_bookmark() is True
		assert shell.is_current_bookmarked
		assert [b.href for b in shell.bookmarks] == ['https://google.com?igu=1', 'https://example.com']

		assert shell.toggle_bookmark() is False
		assert not shell.is_current_bookmarked

	def test_follow_links(self, shell):
		shell.follow(PageLink(label='Google', href='https://google.com?igu=1'))
		assert len(shell.tabs) == 1
		assert shell.address_text == 'https://google.com?igu=1'

		shell.follow(PageLink(label='Add shortcut', href='chrome://bookmarks', action='open'))
		assert len(shell.tabs) == 2
		assert shell.tabs.active_tab.destination.page == InternalPage.BOOKMARKS

	def test_follow_remove_link_deletes_bookmark(self, shell):
		shell.submit_address('chrome://bookmarks')
		(delete,) = [link for link in shell.render_active().page.links if link.action == 'remove']

		before = shell.tabs.snapshot()
		assert shell.follow(delete) is None
		assert len(shell.bookmarks) == 0
		assert shell.tabs.snapshot() == before
		assert 'No bookmarks yet.' in shell.render_active().document

	def test_follow_clear_link_empties_history(self, shell):
		shell.submit_address('example.com')
		shell.submit_address('chrome://history')
		(clear,) = [link for link in shell.render_active().page.links if link.action == 'clear']

		assert shell.follow(clear) is None
		assert len(shell.history) == 0
		assert shell.address_text == 'chrome://history'
		assert 'No history yet.' in shell.render_active().document

	def test_remove_bookmark_by_href(self, shell):
		assert shell.remove_bookmark('https://google.com?igu=1') is True
		assert shell.remove_bookmark('https://google.com?igu=1') is False

	def test_render_internal_page(self, shell):
		stage = shell.render_active()
		assert stage.is_internal
		assert stage.page.page == InternalPage.NEW_TAB
		assert stage.page.links[0].label == 'Google'
		assert stage.document == stage.page.html

	def test_render_history_page_sees_navigations(self, shell):
		shell.submit_address('example.com')
		shell.submit_address('chrome://history')
		stage = shell.render_active()
		assert [link.label for link in stage.page.links] == ['History', 'example.com', 'Clear History']

	def test_render_remote_page(self):
		shell = ShellController(ShellProfile(isolation_policy=NESTED_LAYER_POLICY)).start()
		shell.submit_address('example.com')
		stage = shell.render_active()

		assert not stage.is_internal
		assert stage.isolated.layer_count == 3
		assert f'src="{stage.isolated.root.embedded_src}"' in stage.document

	def test_save_offline(self, shell, tmp_path):
		shell.submit_address('example.com')
		file_path = shell.save_offline(tmp_path)

		assert file_path == tmp_path / 'example.com.html'
		assert 'Offline version of: <a href="https://example.com">' in file_path.read_text(encoding='utf-8')

	def test_save_offline_defaults_to_downloads_path(self, tmp_path):
		shell = ShellController(ShellProfile(downloads_path=tmp_path / 'downloads')).start()
		file_path = shell.save_offline()
		assert file_path == tmp_path / 'downloads' / 'New-Tab.html'
		assert file_path.exists()

	def test_snapshot_history_query(self, shell):
		shell.submit_address('example.com')
		shell.submit_address('python.org')
		snapshot = shell.snapshot(history_query='python')
		assert [e.href for e in snapshot.history] == ['https://python.org']
		assert snapshot.tabs.active_tab.href == 'https://python.org'
