"""Quality assurance for lanelet meshes."""

from .qa_tests import MeshQA

__all__ = ["MeshQA"]
