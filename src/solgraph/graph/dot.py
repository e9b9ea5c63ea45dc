# solgraph/graph/dot.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
DOT generation from the contract graph.

Builds a graphviz.Digraph from the collected nodes and edges, serializes it
and pastes a hand-written legend subgraph before the final closing brace.
"""

import graphviz

from ..config import ColorScheme, ContractStyle
from .contract_graph import ContractGraph, ContractNode
from .models import CallKind


LEGEND_TEMPLATE = """

rankdir=LR
node [shape=plaintext]
subgraph cluster_01 {{
label = "Legend";
key [label=<<table border="0" cellpadding="2" cellspacing="0" cellborder="0">
  <tr><td align="right" port="i1">Internal Call</td></tr>
  <tr><td align="right" port="i2">External Call</td></tr>
  <tr><td align="right" port="i3">Defined Contract</td></tr>
  <tr><td align="right" port="i4">Undefined Contract</td></tr>
  </table>>]
key2 [label=<<table border="0" cellpadding="2" cellspacing="0" cellborder="0">
  <tr><td port="i1">&nbsp;&nbsp;&nbsp;</td></tr>
  <tr><td port="i2">&nbsp;&nbsp;&nbsp;</td></tr>
  <tr><td port="i3"{defined_bgcolor}>&nbsp;&nbsp;&nbsp;</td></tr>
  <tr><td port="i4">
    <table border="1" cellborder="0" cellspacing="0" cellpadding="7" color="{undefined_color}">
      <tr>
       <td></td>
      </tr>
     </table>
  </td></tr>
  </table>>]
key:i1:e -> key2:i1:w [color="{regular_color}"]
key:i2:e -> key2:i2:w [color="{default_color}"]
}}
"""


def generate_dot(graph: ContractGraph, color_scheme: ColorScheme) -> str:
    """Generate the DOT description of a contract graph, legend included.

    Args:
        graph: Graph with nodes and deduplicated edges.
        color_scheme: Colours and styles for nodes, edges and the graph.

    Returns:
        DOT source string.
    """
    digraph = graphviz.Digraph("G")
    digraph.attr(ratio="auto", page="100", compound="true")
    if color_scheme.digraph.bgcolor:
        digraph.attr(bgcolor=color_scheme.digraph.bgcolor)
    if color_scheme.digraph.node_attribs:
        digraph.attr("node", **color_scheme.digraph.node_attribs)
    if color_scheme.digraph.edge_attribs:
        digraph.attr("edge", **color_scheme.digraph.edge_attribs)

    for node in graph.nodes.values():
        digraph.node(node.name, label=node.label, **node_attributes(node, color_scheme))

    for (caller, callee), kind in graph.edges.items():
        digraph.edge(caller, callee, color=edge_color(kind, color_scheme))

    return insert_before_last_occurrence(digraph.source, "}", legend(color_scheme))


def node_attributes(node: ContractNode, color_scheme: ColorScheme) -> dict[str, str]:
    """Colour and style attributes for a defined or undefined contract node."""
    if node.defined:
        style = color_scheme.contract.defined
        attributes = _style_attributes(style)
        attributes["style"] = style.style or "filled"
        return attributes

    style = color_scheme.contract.undefined
    attributes = _style_attributes(style)
    if style.style:
        attributes["style"] = style.style
    return attributes


def _style_attributes(style: ContractStyle) -> dict[str, str]:
    attributes = {"color": style.color}
    if style.fontcolor:
        attributes["fontcolor"] = style.fontcolor
    return attributes


def edge_color(kind: CallKind, color_scheme: ColorScheme) -> str:
    if kind is CallKind.INTERNAL:
        return color_scheme.call.regular
    if kind is CallKind.THIS:
        return color_scheme.call.this
    return color_scheme.call.default


def legend(color_scheme: ColorScheme) -> str:
    """Legend subgraph explaining edge colours and node styles."""
    defined_bgcolor = color_scheme.contract.defined.bgcolor
    return LEGEND_TEMPLATE.format(
        defined_bgcolor=f' bgcolor="{defined_bgcolor}"' if defined_bgcolor else "",
        undefined_color=color_scheme.contract.undefined.color,
        regular_color=color_scheme.call.regular,
        default_color=color_scheme.call.default,
    )


def insert_before_last_occurrence(text: str, marker: str, insertion: str) -> str:
    """Insert text before the last occurrence of marker.

    Returns text unchanged when marker does not occur.
    """
    index = text.rfind(marker)
    if index == -1:
        return text
    return text[:index] + insertion + text[index:]
