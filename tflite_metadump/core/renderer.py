"""
Renders a decoded metadata tree as an indented text report.

The walk order is fixed, so identical input always yields identical output.
Optional fields that are absent produce no line at all.
"""

from typing import Iterable, Optional, TextIO, Tuple

from ..schema.metadata import (AssociatedFile, CustomMetadata, ModelMetadata, ProcessUnit,
                               SubGraphMetadata, TensorGroup, TensorMetadata)

# Anchors printed in full before the listing is truncated.
ANCHOR_DISPLAY_BUDGET = 24

UNNAMED = "<unnamed>"
UNKNOWN_FORMAT = "(unknown or unhandled format)"


def truncated_listing(count: int, budget: int = ANCHOR_DISPLAY_BUDGET) -> Tuple[range, Optional[int], range]:
    """Split `count` items into (head, omitted count, tail) for display.

    Up to `budget` items are listed in full. Beyond that the head is the
    first `budget // 2` items, the omitted count is `count - budget` and the
    tail is `[count - 1 - budget // 2, count)`.
    """
    if count <= budget:
        return range(count), None, range(0)
    half = budget // 2
    return range(half), count - budget, range(count - 1 - half, count)


class ReportWriter:
    """Writes report lines, two spaces per nesting level."""

    INDENT = "  "

    def __init__(self, out: TextIO):
        self.out = out

    def line(self, depth: int, text: str) -> None:
        self.out.write(f"{self.INDENT * depth}{text}\n")


class MetadataRenderer:
    """Walks a `ModelMetadata` tree and writes every present field."""

    def __init__(self, out: TextIO, anchor_display_budget: int = ANCHOR_DISPLAY_BUDGET):
        self.writer = ReportWriter(out)
        self.anchor_display_budget = anchor_display_budget

    def render(self, meta: ModelMetadata) -> None:
        line = self.writer.line
        for field in ('name', 'description', 'version', 'author', 'license', 'min_parser_version'):
            value = getattr(meta, field)
            if value is not None:
                line(0, f"{field}: {value}")

        files = meta.associated_files
        if files is not None:
            line(0, f"{len(files)} associated file(s):")
            self.print_associated_files(0, files)

        subgraphs = meta.subgraph_metadata
        if subgraphs is not None:
            line(0, f"{len(subgraphs)} subgraph(s)")
            for subgraph in subgraphs:
                self.print_subgraph(meta, subgraph)

    def print_subgraph(self, meta: ModelMetadata, subgraph: SubGraphMetadata) -> None:
        line = self.writer.line
        line(0, f"- name: {_name_or_placeholder(subgraph.name)}")
        if subgraph.description is not None:
            line(1, f"description: {subgraph.description}")

        # Lists the model-level files, not the subgraph's own list.
        files = meta.associated_files
        if files is not None:
            line(1, f"{len(files)} associated file(s):")
            self.print_associated_files(1, files)

        tensors = subgraph.input_tensor_metadata
        if tensors is not None:
            line(1, f"- {len(tensors)} input tensor(s) with metadata")
            self.print_tensor_metadata(2, tensors)
        tensors = subgraph.output_tensor_metadata
        if tensors is not None:
            line(1, f"- {len(tensors)} output tensor(s) with metadata")
            self.print_tensor_metadata(2, tensors)

        units = subgraph.input_process_units
        if units is not None:
            line(1, f"- {len(units)} input tensor process units")
            self.print_process_units(2, units)
        units = subgraph.output_process_units
        if units is not None:
            line(1, f"- {len(units)} output tensor process units")
            self.print_process_units(2, units)

        groups = subgraph.input_tensor_groups
        if groups is not None:
            line(1, f"- {len(groups)} input tensor groups")
            self.print_tensor_groups(2, groups)
        groups = subgraph.output_tensor_groups
        if groups is not None:
            line(1, f"- {len(groups)} output tensor groups")
            self.print_tensor_groups(2, groups)

        entries = subgraph.custom_metadata
        if entries is not None:
            line(1, f"- {len(entries)} custom metadata entries")
            self.print_custom_metadata(2, entries)

    def print_tensor_metadata(self, depth: int, tensors: Iterable[TensorMetadata]) -> None:
        line = self.writer.line
        for tensor in tensors:
            line(depth, f"- name: {_name_or_placeholder(tensor.name)}")
            if tensor.description is not None:
                line(depth + 1, f"description: {tensor.description}")
            if tensor.dimension_names is not None:
                line(depth + 1, f"dimension names: {tensor.dimension_names!r}")
            if tensor.content is not None:
                line(depth + 1, f"content: {tensor.content!r}")
            if tensor.stats is not None:
                line(depth + 1, f"stats: {tensor.stats!r}")
            files = tensor.associated_files
            if files is not None:
                line(depth + 1, f"{len(files)} associated file(s):")
                self.print_associated_files(depth + 1, files)
            units = tensor.process_units
            if units is not None:
                line(depth + 1, f"{len(units)} process unit(s):")
                self.print_process_units(depth + 1, units)

    def print_associated_files(self, depth: int, files: Iterable[AssociatedFile]) -> None:
        line = self.writer.line
        for file in files:
            line(depth, f"- name: {_name_or_placeholder(file.name)}")
            if file.description is not None:
                line(depth + 1, f"description: {file.description}")
            line(depth + 1, f"type: {AssociatedFile.type.describe(file.type)}")
            if file.locale is not None:
                line(depth + 1, f"locale: {file.locale}")
            if file.version is not None:
                line(depth + 1, f"version: {file.version}")

    def print_process_units(self, depth: int, units: Iterable[ProcessUnit]) -> None:
        for unit in units:
            self.writer.line(depth, f"- {unit!r}")

    def print_tensor_groups(self, depth: int, groups: Iterable[TensorGroup]) -> None:
        for group in groups:
            self.writer.line(depth, f"- {group!r}")

    def print_custom_metadata(self, depth: int, entries: Iterable[CustomMetadata]) -> None:
        from ..implementations.custom_metadata.factory import CustomMetadataFactory

        line = self.writer.line
        for entry in entries:
            data = entry.data
            if data is None:
                data = memoryview(b"")
            line(depth, f"- name: {_name_or_placeholder(entry.name)}")
            line(depth + 1, f"{data.nbytes} bytes")

            handler = CustomMetadataFactory.create_handler(entry.name)
            if handler is None:
                line(depth + 1, UNKNOWN_FORMAT)
            else:
                handler.handle(data, self, depth + 1)


def _name_or_placeholder(name: Optional[str]) -> str:
    return UNNAMED if name is None else name
