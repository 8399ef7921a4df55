# hxcrepair/document.py
#
# HxC XML disk layout documents: load, navigate, edit and serialize.
#
# Written & released by Keir Fraser <keir.xen@gmail.com>
#
# This is free and unencumbered software released into the public domain.
# See the file COPYING for more details, or visit <http://unlicense.org>.

from __future__ import annotations
from typing import List, Optional

import xml.etree.ElementTree as ET

from hxcrepair import error

xml_declaration = '<?xml version="1.0" encoding="UTF-8"?>'

def hex_int(text: Optional[str], what: str) -> int:
    """Parse a '0x'-prefixed hex field (e.g. '0x033500')."""
    try:
        return int((text or '').strip(), 16)
    except ValueError:
        raise error.Fatal('%s: Bad hex value: %r' % (what, text))

def hex_str(value: int) -> str:
    return '0x%06X' % value

def dec_int(text: Optional[str], what: str) -> int:
    try:
        return int((text or '').strip())
    except ValueError:
        raise error.Fatal('%s: Bad integer value: %r' % (what, text))


class Document:

    def __init__(self, root: ET.Element) -> None:
        error.check(root.tag == 'disk_layout',
                    'Not an HxC XML disk layout: root element is <%s>'
                    % root.tag)
        self.root = root

    @classmethod
    def from_file(cls, name: str) -> Document:
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        try:
            tree = ET.parse(name, parser=parser)
        except ET.ParseError as err:
            raise error.Fatal('%s: XML parse error: %s' % (name, err))
        return cls(tree.getroot())

    @classmethod
    def from_string(cls, text: str) -> Document:
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        try:
            root = ET.fromstring(text, parser=parser)
        except ET.ParseError as err:
            raise error.Fatal('XML parse error: %s' % err)
        return cls(root)

    def find(self, path: str) -> Optional[ET.Element]:
        return self.root.find(path)

    def findall(self, path: str) -> List[ET.Element]:
        return self.root.findall(path)

    def to_string(self) -> str:
        return (xml_declaration + '\n'
                + ET.tostring(self.root, encoding='unicode') + '\n')


## Tree editing. Whitespace is copied from neighbouring nodes so that new
## and moved elements are indented like the rest of the document.

def child(parent: ET.Element, tag: str, what: str) -> ET.Element:
    node = parent.find(tag)
    error.check(node is not None, '%s: Missing <%s>' % (what, tag))
    assert node is not None # mypy
    return node

def new_node(tag: str, text: Optional[str] = None, **attrs) -> ET.Element:
    node = ET.Element(tag, {k: str(v) for k, v in attrs.items()})
    node.text = text
    return node

def add_children(node: ET.Element, children: List[ET.Element],
                 like: ET.Element) -> None:
    """Append children to node, indenting them like the children of
    the sibling element `like`."""
    inner = list(like)
    indent = like.text if inner else None
    last_tail = inner[-1].tail if inner else None
    sep = inner[0].tail if len(inner) > 1 else indent
    node.text = indent
    for c in children:
        c.tail = sep
        node.append(c)
    if children:
        children[-1].tail = last_tail

def insert_before(parent: ET.Element, node: ET.Element,
                  ref: ET.Element) -> None:
    idx = list(parent).index(ref)
    node.tail = parent[idx-1].tail if idx > 0 else parent.text
    parent.insert(idx, node)

def insert_first(parent: ET.Element, node: ET.Element) -> None:
    if len(parent):
        node.tail = parent.text
    parent.insert(0, node)

def reorder(parent: ET.Element, nodes: List[ET.Element]) -> None:
    """Rearrange the listed children of parent into the order given.
    They take over the slots they occupied between them; any other
    children (comments) keep their positions."""
    items = list(parent)
    if not nodes or items == nodes:
        return
    sep = items[0].tail if len(items) > 1 else None
    last_tail = items[-1].tail
    slots = [i for i, x in enumerate(items) if x in nodes]
    for i, node in zip(slots, nodes):
        items[i] = node
    for node in items[:-1]:
        if sep is not None:
            node.tail = sep
    items[-1].tail = last_tail
    parent[:] = items

# Local variables:
# python-indent: 4
# End:
