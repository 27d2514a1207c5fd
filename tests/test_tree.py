"""Tests for fragloc.tree — BeautifulSoup adapter and end-to-end resolution."""
from __future__ import annotations

import pytest
from bs4 import BeautifulSoup
from bs4.element import NavigableString, Tag

from fragloc.errors import NodeResolutionError
from fragloc.identifier import parse_identifier
from fragloc.tree import DocumentTree, SoupTree
from fragloc.types import ResolveOptions


PACKAGE_OPF = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<package version="3.0" unique-identifier="uid">\n'
    '<metadata></metadata>\n'
    '<manifest>\n'
    '<item id="ch1" href="ch1.xhtml" media-type="application/xhtml+xml"></item>\n'
    '<item id="ch2" href="ch2.xhtml" media-type="application/xhtml+xml"></item>\n'
    '</manifest>\n'
    '<spine>\n'
    '<itemref idref="ch1"></itemref>\n'
    '<itemref idref="ch2" id="ref-ch2"></itemref>\n'
    '</spine>\n'
    '</package>\n'
)

CHAPTER_XHTML = (
    '<!DOCTYPE html>\n'
    '<html>\n'
    '<head><title>Chapter Two</title></head>\n'
    '<body>\n'
    '<p id="first" class="lead intro">Hello world</p>\n'
    '<p>Second <em>para</em></p>\n'
    '</body>\n'
    '</html>\n'
)

SVG_XHTML = (
    '<html>\n'
    '<body>\n'
    '<svg><image xlink:href="cover.jpg"></image></svg>\n'
    '</body>\n'
    '</html>\n'
)


@pytest.fixture
def package_tree() -> SoupTree:
    return SoupTree.from_markup(PACKAGE_OPF)


@pytest.fixture
def chapter_tree() -> SoupTree:
    return SoupTree.from_markup(CHAPTER_XHTML)


class TestSoupTree:
    def test_satisfies_protocol(self, chapter_tree: SoupTree) -> None:
        assert isinstance(chapter_tree, DocumentTree)

    def test_container_element(self, package_tree: SoupTree) -> None:
        container = package_tree.container_element()
        assert isinstance(container, Tag)
        assert package_tree.tag_name(container) == "package"

    def test_no_container_in_content_document(self, chapter_tree: SoupTree) -> None:
        assert chapter_tree.container_element() is None

    def test_children_include_text_nodes(self, chapter_tree: SoupTree) -> None:
        body = chapter_tree.soup.find("body")
        children = chapter_tree.child_nodes(body)
        assert len(children) == 5
        assert not chapter_tree.is_element(children[0])
        assert chapter_tree.is_element(children[1])

    def test_text_node_has_no_children(self, chapter_tree: SoupTree) -> None:
        text = chapter_tree.get_element_by_id("first").contents[0]  # type: ignore[union-attr]
        assert isinstance(text, NavigableString)
        assert chapter_tree.child_nodes(text) == ()
        assert chapter_tree.tag_name(text) == ""
        assert chapter_tree.get_attribute(text, "id") is None

    def test_document_is_not_an_element(self, chapter_tree: SoupTree) -> None:
        assert not chapter_tree.is_element(chapter_tree.soup)

    def test_multi_valued_attribute_is_joined(self, chapter_tree: SoupTree) -> None:
        first = chapter_tree.get_element_by_id("first")
        assert chapter_tree.get_attribute(first, "class") == "lead intro"
        assert chapter_tree.get_attribute(first, "missing") is None

    def test_parent_node(self, package_tree: SoupTree) -> None:
        itemref = package_tree.get_element_by_id("ref-ch2")
        parent = package_tree.parent_node(itemref)
        assert package_tree.tag_name(parent) == "spine"

    def test_wraps_existing_soup(self) -> None:
        soup = BeautifulSoup(CHAPTER_XHTML, "html.parser")
        assert SoupTree(soup).soup is soup


class TestSoupResolution:
    def test_spine_link_then_chapter_offset(
        self, package_tree: SoupTree, chapter_tree: SoupTree,
    ) -> None:
        identifier = parse_identifier("identifier(/6/4!/4/2/1:6)")
        chapters = {"ch2.xhtml": chapter_tree}

        href = identifier.resolve_uri(0, package_tree)
        assert href == "ch2.xhtml"

        location = identifier.resolve(chapters[href])
        assert location.node == "Hello world"
        assert location.offset == 6
        assert location.side_bias is None

    def test_id_anchor_in_chapter(self, chapter_tree: SoupTree) -> None:
        identifier = parse_identifier("identifier(/6/4!/4/99[first]/1:2[;s=a])")
        location = identifier.resolve(chapter_tree)
        assert location.node == "Hello world"
        assert location.side_bias == "after"

    def test_ignore_ids_uses_broken_index(self, chapter_tree: SoupTree) -> None:
        identifier = parse_identifier("identifier(/6/4!/4/99[first]/1:2)")
        with pytest.raises(NodeResolutionError):
            identifier.resolve(chapter_tree, ResolveOptions(ignore_ids=True))

    def test_nested_element_path(self, chapter_tree: SoupTree) -> None:
        node = parse_identifier("identifier(/6/4!/4/4/2)").resolve_node(1, chapter_tree)
        assert chapter_tree.tag_name(node) == "em"

    def test_svg_image_link(self) -> None:
        tree = SoupTree.from_markup(SVG_XHTML)
        identifier = parse_identifier("identifier(/6/4!/2/2/1!/4)")
        assert identifier.resolve_uri(1, tree) == "cover.jpg"
