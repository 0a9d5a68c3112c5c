import unittest
from unittest.mock import MagicMock

from vcs_status_bar.plugin import BranchStatusPlugin, PaneInfo, PanesUpdated, TabInfo, TabsUpdated
from vcs_status_bar.plugin.state import FIRST_TAB_POSITION
from vcs_status_bar.plugin.workspace import get_focused_pane, get_focused_tab


class TestFocusHelpers(unittest.TestCase):
    def test_get_focused_tab(self) -> None:
        tabs = [TabInfo(0, "one"), TabInfo(1, "two", active=True), TabInfo(2, "three")]
        self.assertEqual(get_focused_tab(tabs), tabs[1])
        self.assertIsNone(get_focused_tab([TabInfo(0), TabInfo(1)]))
        self.assertIsNone(get_focused_tab([]))

    def test_get_focused_pane_skips_plugins(self) -> None:
        panes = {
            0: [
                PaneInfo(1, "status-bar", is_focused=True, is_plugin=True),
                PaneInfo(2, "shell", is_focused=True),
            ]
        }
        self.assertEqual(get_focused_pane(0, panes), PaneInfo(2, "shell", is_focused=True))

    def test_get_focused_pane_missing(self) -> None:
        panes = {0: [PaneInfo(1, "shell")]}
        self.assertIsNone(get_focused_pane(0, panes))
        self.assertIsNone(get_focused_pane(3, panes))


class TestPluginFocusTracking(unittest.TestCase):
    def setUp(self) -> None:
        # Focus handling never talks to the host after load
        self.host = MagicMock()
        self.plugin = BranchStatusPlugin(self.host)
        self.plugin.load({})
        self.host.reset_mock()

    def test_defaults_to_first_tab(self) -> None:
        self.assertEqual(self.plugin.state.focused_tab_position, FIRST_TAB_POSITION)
        self.assertIsNone(self.plugin.state.focused_pane)

    def test_tab_update_moves_focus(self) -> None:
        event = TabsUpdated([TabInfo(0, "a"), TabInfo(2, "c", active=True)])
        self.assertFalse(self.plugin.update(event))
        self.assertEqual(self.plugin.state.focused_tab_position, 2)
        self.host.assert_not_called()
        self.assertEqual(self.host.method_calls, [])

    def test_tab_update_without_focus_keeps_default(self) -> None:
        self.assertFalse(self.plugin.update(TabsUpdated([TabInfo(1), TabInfo(2)])))
        self.assertEqual(self.plugin.state.focused_tab_position, FIRST_TAB_POSITION)

    def test_tab_update_without_focus_keeps_previous(self) -> None:
        self.plugin.update(TabsUpdated([TabInfo(0), TabInfo(1, active=True)]))
        self.plugin.update(TabsUpdated([TabInfo(0), TabInfo(1)]))
        self.assertEqual(self.plugin.state.focused_tab_position, 1)

    def test_pane_update_uses_first_tab_before_tab_events(self) -> None:
        panes = {
            0: [PaneInfo(1, "left"), PaneInfo(2, "right", is_focused=True)],
            1: [PaneInfo(3, "other", is_focused=True)],
        }
        self.assertFalse(self.plugin.update(PanesUpdated(panes)))
        self.assertEqual(self.plugin.state.focused_pane.id, 2)

    def test_pane_update_follows_focused_tab(self) -> None:
        panes = {
            0: [PaneInfo(2, "right", is_focused=True)],
            1: [PaneInfo(3, "other", is_focused=True)],
        }
        self.plugin.update(TabsUpdated([TabInfo(0), TabInfo(1, active=True)]))
        self.plugin.update(PanesUpdated(panes))
        self.assertEqual(self.plugin.state.focused_pane.id, 3)

    def test_pane_update_without_focused_pane(self) -> None:
        self.plugin.update(PanesUpdated({0: [PaneInfo(2, "shell", is_focused=True)]}))
        self.plugin.update(PanesUpdated({0: [PaneInfo(2, "shell")]}))
        self.assertIsNone(self.plugin.state.focused_pane)

    def test_focus_does_not_touch_branch(self) -> None:
        self.plugin.state.current_branch = "main"
        self.plugin.update(TabsUpdated([TabInfo(4, active=True)]))
        self.plugin.update(PanesUpdated({}))
        self.assertEqual(self.plugin.state.current_branch, "main")


if __name__ == "__main__":
    unittest.main()
