from cbsigner.protocols.tree_hash import ObjectTreeHash

__all__ = ["ObjectTreeHash"]
