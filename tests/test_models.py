"""Tests for the canonical document model."""

import json

import pytest
from docrender.models import (
    BlockType,
    CustomBlock,
    Document,
    HeaderBlock,
    ImageResource,
    ListItemBlock,
    OrderedListBlock,
    ParagraphBlock,
    Section,
    TableBlock,
    TableCell,
    TableRow,
    TableRowGroup,
    UnorderedListBlock,
)
from pydantic import ValidationError

from builders import paragraph_item, single_section


class TestBlockConstruction:
    """Tests for block variants."""

    def test_block_type_is_set_by_variant(self):
        """Test that each variant carries its own tag."""
        assert ParagraphBlock(id="b1", text="x").type == BlockType.PARAGRAPH
        assert UnorderedListBlock(id="b2").type == BlockType.UNORDERED_LIST
        assert CustomBlock(id="b3").type == BlockType.CUSTOM

    def test_block_requires_id(self):
        """Test that a block without an identifier is rejected."""
        with pytest.raises(ValidationError):
            ParagraphBlock(text="no id")

        with pytest.raises(ValidationError):
            ParagraphBlock(id="", text="empty id")

    @pytest.mark.parametrize(
        "level,expected",
        [(None, 1), (0, 1), (-3, 1), (2, 2), (6, 6), (9, 6)],
    )
    def test_header_level_is_clamped(self, level, expected):
        """Test header level defaults to 1 and stays within 1-6."""
        assert HeaderBlock(id="h", text="Title", level=level).level == expected

    def test_header_level_defaults_to_one(self):
        """Test header level when absent."""
        assert HeaderBlock(id="h", text="Title").level == 1

    def test_blocks_are_read_only(self):
        """Test that block attributes cannot be reassigned."""
        block = ParagraphBlock(id="b1", text="x")
        with pytest.raises(ValidationError):
            block.text = "changed"

    def test_list_children_must_be_list_items(self):
        """Test that lists only accept LIST_ITEM children."""
        with pytest.raises(ValidationError):
            UnorderedListBlock.model_validate(
                {"id": "ul", "children": [{"id": "p", "type": "PARAGRAPH", "text": "x"}]}
            )


class TestDocumentValidation:
    """Tests for document-level invariants."""

    def test_empty_document(self):
        """Test defaults of an empty document."""
        document = Document()
        assert document.sections == []
        assert document.image_resources == []
        assert document.schema_version == "1.0.0"
        assert document.title is None

    def test_section_requires_id(self):
        """Test that a section without an identifier is rejected."""
        with pytest.raises(ValidationError):
            Section(header="No id")

    def test_duplicate_section_ids_rejected(self):
        """Test section identifiers are unique."""
        with pytest.raises(ValidationError, match="Duplicate section id"):
            Document(sections=[Section(id="s1"), Section(id="s1")])

    def test_duplicate_image_ids_rejected(self):
        """Test image resource identifiers are unique."""
        with pytest.raises(ValidationError, match="Duplicate image resource id"):
            Document(image_resources=[ImageResource(id="img"), ImageResource(id="img")])

    def test_duplicate_nested_block_ids_rejected(self):
        """Test block identifiers are unique across the whole tree."""
        nested = UnorderedListBlock(id="ul", children=[paragraph_item("dup", "x")])
        with pytest.raises(ValidationError, match="Duplicate block id"):
            single_section(nested, ParagraphBlock(id="dup", text="y"))

    def test_missing_block_type_rejected(self):
        """Test that a payload block without a type fails to validate."""
        payload = {"sections": [{"id": "s1", "blocks": [{"id": "b1", "text": "x"}]}]}
        with pytest.raises(ValidationError):
            Document.from_dict(payload)

    def test_unknown_block_type_rejected(self):
        """Test that a payload block with an unknown type fails to validate."""
        payload = {"sections": [{"id": "s1", "blocks": [{"id": "b1", "type": "MARQUEE"}]}]}
        with pytest.raises(ValidationError):
            Document.from_dict(payload)


class TestDocumentAccess:
    """Tests for lookups and traversal."""

    def test_get_image(self, image_resource):
        """Test image lookup by identifier."""
        document = Document(image_resources=[image_resource])

        assert document.get_image("img1") is image_resource
        assert document.get_image("missing") is None
        assert document.get_image(None) is None

    def test_display_url_prefers_resolved(self):
        """Test display URL falls back to the original URL."""
        assert ImageResource(id="a", original_url="o", resolved_url="r").display_url == "r"
        assert ImageResource(id="b", original_url="o").display_url == "o"

    def test_iter_blocks_is_depth_first(self, nested_list_document):
        """Test traversal visits every block in document order."""
        ids = [block.id for block in nested_list_document.iter_blocks()]

        assert ids == [
            "ul1",
            "li1",
            "p1",
            "ol1",
            "li1.1",
            "li1.1-p",
            "li1.2",
            "li1.2-p",
            "li2",
            "li2-p",
        ]

    def test_iter_blocks_includes_table_cells(self):
        """Test traversal descends into structural table cells."""
        table = TableBlock(
            id="t",
            row_groups=[
                TableRowGroup(
                    kind="header",
                    rows=[TableRow(cells=[TableCell(children=[ParagraphBlock(id="c1", text="H")])])],
                )
            ],
        )
        document = single_section(table)

        assert [block.id for block in document.iter_blocks()] == ["t", "c1"]


class TestTableFlattening:
    """Tests for table representations."""

    def test_flat_table(self):
        """Test flat tables pass through."""
        table = TableBlock(id="t", headers=["A", "B"], rows=[["1", "2"]])

        assert not table.is_structural
        assert table.flattened() == (["A", "B"], [["1", "2"]])

    def test_structural_table(self):
        """Test structural tables flatten to headers and rows."""

        def row(*texts):
            return TableRow(
                cells=[
                    TableCell(children=[ParagraphBlock(id=f"c-{text}", text=text)]) for text in texts
                ]
            )

        table = TableBlock(
            id="t",
            row_groups=[
                TableRowGroup(kind="header", rows=[row("H1", "H2")]),
                TableRowGroup(kind="body", rows=[row("a", "b"), row("c", "d")]),
            ],
        )

        assert table.is_structural
        assert table.flattened() == (["H1", "H2"], [["a", "b"], ["c", "d"]])

    def test_empty_cell_text(self):
        """Test a cell without text blocks renders as empty text."""
        assert TableCell().text == ""


class TestDocumentLoading:
    """Tests for JSON and YAML loading."""

    PAYLOAD = {
        "metadata": {"title": "Loaded", "source_url": "https://example.com"},
        "image_resources": [{"id": "img1", "original_url": "https://example.com/a.png"}],
        "sections": [
            {
                "id": "s1",
                "header": "Intro",
                "blocks": [
                    {"id": "b1", "type": "PARAGRAPH", "text": "Hello"},
                    {
                        "id": "b2",
                        "type": "ORDERED_LIST",
                        "children": [
                            {
                                "id": "li1",
                                "type": "LIST_ITEM",
                                "children": [{"id": "t1", "type": "TEXT_CONTENT", "text": "One"}],
                            }
                        ],
                    },
                    {"id": "b3", "type": "IMAGE_REFERENCE", "resource_id": "img1"},
                ],
            }
        ],
    }

    def test_from_dict_routes_block_types(self):
        """Test the discriminator picks the right block model."""
        document = Document.from_dict(self.PAYLOAD)
        blocks = document.sections[0].blocks

        assert isinstance(blocks[0], ParagraphBlock)
        assert isinstance(blocks[1], OrderedListBlock)
        assert isinstance(blocks[1].children[0], ListItemBlock)
        assert blocks[2].resource_id == "img1"

    def test_from_json(self, tmp_path):
        """Test loading a document from a JSON file."""
        path = tmp_path / "doc.json"
        path.write_text(json.dumps(self.PAYLOAD), encoding="utf-8")

        document = Document.from_json(path)

        assert document.title == "Loaded"
        assert document.get_image("img1") is not None

    def test_from_json_missing_file(self, tmp_path):
        """Test loading a missing file."""
        with pytest.raises(FileNotFoundError):
            Document.from_json(tmp_path / "missing.json")

    def test_from_yaml(self, tmp_path):
        """Test loading a document from a YAML file."""
        yaml = pytest.importorskip("yaml")
        path = tmp_path / "doc.yaml"
        path.write_text(yaml.safe_dump(self.PAYLOAD), encoding="utf-8")

        document = Document.from_yaml(path)

        assert document.sections[0].header == "Intro"

    def test_json_round_trip_keeps_tree(self):
        """Test dumping and reloading a document preserves it."""
        document = Document.from_dict(self.PAYLOAD)

        assert Document.model_validate_json(document.model_dump_json()) == document
