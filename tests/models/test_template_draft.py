from decimal import Decimal

import pytest

from pdf_templates.models.extraction_result import (
    ExtractedItem,
    ExtractionError,
    ExtractionResult,
)
from pdf_templates.models.template import ColumnDefinition, ColumnType
from pdf_templates.models.template_draft import (
    DraftModeError,
    ExpertLinePattern,
    SaveValidationError,
    TemplateDraft,
)
from pdf_templates.parsers.column_compiler import ColumnConfigurationError
from pdf_templates.parsers.template_parser import extract

T = ColumnType


def one_item_result() -> ExtractionResult:
    return ExtractionResult(
        items=[
            ExtractedItem(
                description="Tornillo",
                quantity=Decimal("2"),
                unit_price=Decimal("5"),
                line_number=1,
            )
        ]
    )


def column_types(draft: TemplateDraft) -> list[ColumnType]:
    return [column.column_type for column in draft.line_source.columns]


def test_new_draft_defaults():
    draft = TemplateDraft()

    assert draft.is_new
    assert draft.is_visual
    assert draft.table_start_marker == "Descripcion"
    assert draft.table_end_marker == "Subtotal"
    assert column_types(draft) == [T.TEXT, T.NUMBER, T.PRICE, T.PRICE]
    assert draft.products_config().field_mapping.as_dict() == {
        "description": 1,
        "quantity": 2,
        "unit_price": 3,
        "line_total": 4,
    }


def test_add_column():
    draft = TemplateDraft()

    column = draft.add_column(T.SKU)

    assert column.label == "Code"
    assert column_types(draft)[-1] is T.SKU
    assert draft.products_config().field_mapping.sku == 5


def test_rejected_column_leaves_layout_unchanged():
    draft = TemplateDraft()
    before = draft.products_config()

    with pytest.raises(ColumnConfigurationError):
        draft.add_column(T.TEXT)

    assert len(draft.line_source.columns) == 4
    assert draft.products_config() == before


def test_remove_column():
    draft = TemplateDraft()
    sku = draft.add_column(T.SKU)

    draft.remove_column(sku.id)

    assert T.SKU not in column_types(draft)


def test_remove_unknown_column_is_ignored():
    draft = TemplateDraft()

    draft.remove_column("missing")

    assert len(draft.line_source.columns) == 4


def test_move_column():
    draft = TemplateDraft()

    draft.move_column(1, "left")

    assert column_types(draft) == [T.NUMBER, T.TEXT, T.PRICE, T.PRICE]
    assert draft.products_config().field_mapping.quantity == 1


@pytest.mark.parametrize(
    "index,direction",
    [(0, "left"), (3, "right"), (7, "left"), (-1, "right")],
)
def test_move_past_either_end_is_ignored(index, direction):
    draft = TemplateDraft()

    draft.move_column(index, direction)

    assert column_types(draft) == [T.TEXT, T.NUMBER, T.PRICE, T.PRICE]


def test_switch_to_expert_freezes_the_compiled_pattern():
    draft = TemplateDraft()
    compiled = draft.products_config()

    draft.switch_to_expert()

    assert not draft.is_visual
    assert isinstance(draft.line_source, ExpertLinePattern)
    assert draft.products_config() == compiled


@pytest.mark.parametrize(
    "edit",
    [
        lambda d: d.add_column(T.SKU),
        lambda d: d.remove_column("x"),
        lambda d: d.move_column(0, "right"),
    ],
    ids=["add", "remove", "move"],
)
def test_column_edits_are_refused_in_expert_mode(edit):
    draft = TemplateDraft()
    draft.switch_to_expert()

    with pytest.raises(DraftModeError):
        edit(draft)


def test_switch_to_visual_discards_hand_written_pattern():
    draft = TemplateDraft()
    draft.switch_to_expert()
    draft.line_source.line_pattern = r"^(.+)$"

    draft.switch_to_visual(
        [
            ColumnDefinition(column_type=T.NUMBER),
            ColumnDefinition(column_type=T.TEXT),
            ColumnDefinition(column_type=T.PRICE),
        ]
    )

    assert draft.is_visual
    assert draft.products_config().line_pattern != r"^(.+)$"
    assert draft.products_config().field_mapping.as_dict() == {
        "description": 2,
        "quantity": 1,
        "unit_price": 3,
    }


def test_switch_to_visual_rejects_bad_layout():
    draft = TemplateDraft()
    draft.switch_to_expert()

    with pytest.raises(ColumnConfigurationError):
        draft.switch_to_visual(
            [
                ColumnDefinition(column_type=T.TEXT),
                ColumnDefinition(column_type=T.TEXT),
            ]
        )

    assert not draft.is_visual


def test_visual_draft_extracts_a_real_document(dg_text):
    draft = TemplateDraft(name="D&G")
    draft.move_column(1, "left")

    result = extract(dg_text, draft.build_template())

    assert isinstance(result, ExtractionResult)
    assert [item.description for item in result.items] == [
        "Tornillo 10x",
        "Taco fisher N 8",
        "Taladro percutor 650W",
    ]
    assert result.items[2].unit_price == Decimal("45300.00")
    assert draft.validate_for_save(result).name == "D&G"


@pytest.mark.parametrize("name", ["", "   "])
def test_save_requires_a_name(name):
    draft = TemplateDraft(name=name)

    with pytest.raises(SaveValidationError, match="name"):
        draft.validate_for_save(one_item_result())


def test_overlong_name_is_a_save_error(dg_template):
    draft = TemplateDraft.from_template(dg_template)
    draft.name = "N" * 300

    with pytest.raises(SaveValidationError, match="at most 255"):
        draft.validate_for_save()


def test_name_at_the_length_limit_can_be_saved(dg_template):
    draft = TemplateDraft.from_template(dg_template)
    draft.name = " " + "N" * 255 + " "

    assert len(draft.validate_for_save().name) == 255


@pytest.mark.parametrize(
    "test_result",
    [None, ExtractionResult(), ExtractionError(message="unreadable")],
    ids=["untested", "no-items", "failed"],
)
def test_new_template_needs_a_successful_test(test_result):
    draft = TemplateDraft(name="Fenix")

    with pytest.raises(SaveValidationError):
        draft.validate_for_save(test_result)


def test_new_template_with_items_can_be_saved():
    draft = TemplateDraft(name="  Fenix  ", keywords="FENIX, , Distribuidora Fenix")

    template = draft.validate_for_save(one_item_result())

    assert template.id is None
    assert template.name == "Fenix"
    assert template.detect_keywords == ["FENIX", "Distribuidora Fenix"]
    assert template.products_config.line_pattern.startswith("^")


def test_existing_template_saves_without_a_test(dg_template):
    draft = TemplateDraft.from_template(dg_template)

    template = draft.validate_for_save()

    assert template.id == "dg"
    assert template.products_config == dg_template.products_config
    assert template.header_config == dg_template.header_config


def test_from_template_opens_in_expert_mode(dg_template):
    draft = TemplateDraft.from_template(dg_template)

    assert not draft.is_new
    assert not draft.is_visual
    assert draft.keywords == "D&G"
    assert draft.line_source.line_pattern == dg_template.products_config.line_pattern


def test_editing_a_draft_does_not_touch_the_stored_template(dg_template):
    draft = TemplateDraft.from_template(dg_template)

    draft.line_source.field_mapping.sku = 5
    draft.header_config.total_pattern = None

    assert dg_template.products_config.field_mapping.sku is None
    assert dg_template.header_config.total_pattern is not None


@pytest.mark.parametrize("supplier_id", ["", "undefined", "null", None])
def test_no_supplier_sentinels_become_none(supplier_id):
    draft = TemplateDraft(name="Fenix", supplier_id=supplier_id)

    assert draft.validate_for_save(one_item_result()).supplier_id is None
