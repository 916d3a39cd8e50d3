from dc_ui.presenters.tree import build_render_tree, describe_node

__all__ = ["build_render_tree", "describe_node"]
