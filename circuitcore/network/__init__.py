from .graph import Node, Circuit, nodes_of  # noqa: F401
