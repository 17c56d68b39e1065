import tkinter as tk

import pytest

from outline_navigator.core.models import Emphasis, OutlineNode, OutlineRow
from outline_navigator.ui.widgets.outline_tree import OutlineTreeWidget


def _can_create_tk_root() -> bool:
    try:
        r = tk.Tk()
        r.destroy()
        return True
    except tk.TclError:
        return False


pytestmark = pytest.mark.skipif(
    not _can_create_tk_root(),
    reason="Tkinter root cannot be created in this environment (likely headless CI without display).",
)


@pytest.fixture
def tk_root():
    root = tk.Tk()
    # Avoid showing a window during tests
    root.withdraw()
    yield root
    try:
        root.update_idletasks()
    except tk.TclError:
        pass
    root.destroy()


@pytest.fixture
def activations():
    return []


@pytest.fixture
def widget(tk_root, activations):
    w = OutlineTreeWidget(tk_root, on_item_activated=activations.append, indent=2)
    w.pack(fill="both", expand=True)
    tk_root.update_idletasks()
    return w


def make_rows():
    ch1 = OutlineNode(title="Ch1", children=[OutlineNode(title="1.1", key=(0, 0))], key=(0,))
    ch2 = OutlineNode(title="Ch2", key=(1,), emphasis=Emphasis(bold=True, color=(255, 0, 0)))
    return [
        OutlineRow(node=ch1, depth=0, state="expanded"),
        OutlineRow(node=ch1.children[0], depth=1, state="leaf"),
        OutlineRow(node=ch2, depth=0, state="leaf"),
    ]


def test_empty_rows_show_placeholder(widget, tk_root):
    widget.populate([], empty_text="No outline available")
    tk_root.update_idletasks()

    assert widget.is_placeholder_visible()
    assert widget.get_row_keys() == []


def test_rows_render_in_order_with_glyphs_and_indentation(widget, tk_root):
    widget.populate(make_rows())
    tk_root.update_idletasks()

    assert not widget.is_placeholder_visible()
    assert widget.get_row_keys() == [(0,), (0, 0), (1,)]
    assert widget.get_row_text((0,)) == "▼ Ch1"
    assert widget.get_row_text((0, 0)) == "    1.1"
    assert widget.get_row_text((1,)) == "  Ch2"


def test_collapsed_glyph(widget):
    node = OutlineNode(title="Ch1", children=[OutlineNode(title="1.1")], key=(0,))
    widget.populate([OutlineRow(node=node, depth=0, state="collapsed")])
    assert widget.get_row_text((0,)) == "▶ Ch1"


def test_emphasis_is_applied_as_tag(widget):
    widget.populate(make_rows())

    item_id = widget.find_item_by_key((1,))
    tags = widget._tree.item(item_id, "tags")
    assert tags
    assert widget._tree.tag_configure(tags[0], "foreground") == "#ff0000"
    # Plain rows carry no emphasis tag
    assert not widget._tree.item(widget.find_item_by_key((0,)), "tags")


def test_click_reports_row_key(widget, activations, tk_root):
    widget.populate(make_rows())
    widget.update()

    item_id = widget.find_item_by_key((1,))
    widget._tree.see(item_id)
    tk_root.update_idletasks()
    bbox = widget._tree.bbox(item_id)
    assert bbox, "Treeview bbox for item not available"

    widget._tree.event_generate("<ButtonRelease-1>", x=5, y=bbox[1] + bbox[3] // 2)
    widget.update()

    assert activations == [(1,)]


def test_return_key_activates_focused_row_and_focus_survives_repopulate(widget, activations):
    widget.populate(make_rows())
    widget.focus_key((0,))

    widget._on_key_activate(None)
    assert activations == [(0,)]

    widget.populate(make_rows())
    assert widget._tree.focus() == widget.find_item_by_key((0,))

    widget.forget_activation()
    widget.populate(make_rows())
    assert widget._tree.focus() == ""
