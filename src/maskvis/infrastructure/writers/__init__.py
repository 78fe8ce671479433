"""Output writers."""

from .annotated_structure_writer import AnnotatedStructureWriter, format_score, header_remarks

__all__ = ["AnnotatedStructureWriter", "format_score", "header_remarks"]
