from renscriptpy.ast import PropertyDeclaration, PropKind, PropType, UnknownPropType
from renscriptpy.parser import parse_script
from renscriptpy.schema import ChangeSet, RenamedProperty, changed_fields, diff_properties
from tests._shared_cases import ROTATOR_DEFAULT_EDIT, ROTATOR_SOURCE


def _prop(name: str, prop_type: PropType = PropKind.NUMBER, **kwargs: object) -> PropertyDeclaration:
    return PropertyDeclaration(name=name, prop_type=prop_type, **kwargs)  # type: ignore[arg-type]


def test_identical_schemas_produce_empty_change_set() -> None:
    props = parse_script(ROTATOR_SOURCE).properties

    change_set = diff_properties(props, props)
    assert change_set == ChangeSet()
    assert change_set.is_empty


def test_modified_default_lists_only_that_field() -> None:
    old = parse_script(ROTATOR_SOURCE).properties
    new = parse_script(ROTATOR_DEFAULT_EDIT).properties

    change_set = diff_properties(old, new)

    assert change_set.added == ()
    assert change_set.removed == ()
    assert change_set.renamed == ()
    assert len(change_set.modified) == 1
    modified = change_set.modified[0]
    assert modified.old.default_value == "1"
    assert modified.new.default_value == "5"
    assert modified.changed_fields == ("default_value",)


def test_changed_fields_follow_declaration_order() -> None:
    old = _prop("speed", min=0, max=10, description="a")
    new = _prop("speed", PropKind.FLOAT, section="Motion", min=1, max=10, description="b")

    assert changed_fields(old, new) == ("prop_type", "section", "min", "description")


def test_options_and_once_do_not_count_as_modifications() -> None:
    old = _prop("mode", PropKind.SELECT, options=("a",))
    new = _prop("mode", PropKind.SELECT, options=("a", "b"), once=True)

    assert diff_properties([old], [new]).is_empty


def test_added_and_removed_of_different_types() -> None:
    old = [_prop("speed"), _prop("label", PropKind.STRING)]
    new = [_prop("speed"), _prop("visible", PropKind.BOOLEAN)]

    change_set = diff_properties(old, new)

    assert [prop.name for prop in change_set.added] == ["visible"]
    assert [prop.name for prop in change_set.removed] == ["label"]
    assert change_set.renamed == ()


def test_single_same_type_pair_is_a_rename() -> None:
    old = [_prop("speed", default_value="1"), _prop("size")]
    new = [_prop("velocity", default_value="1"), _prop("size")]

    change_set = diff_properties(old, new)

    assert change_set.added == ()
    assert change_set.removed == ()
    assert change_set.modified == ()
    assert change_set.renamed == (RenamedProperty(old=old[0], new=new[0]),)
    assert (change_set.renamed[0].from_name, change_set.renamed[0].to_name) == ("speed", "velocity")


def test_two_pairs_are_never_paired_as_renames() -> None:
    old = [_prop("a"), _prop("b")]
    new = [_prop("c"), _prop("d")]

    change_set = diff_properties(old, new)

    assert change_set.renamed == ()
    assert [prop.name for prop in change_set.added] == ["c", "d"]
    assert [prop.name for prop in change_set.removed] == ["a", "b"]


def test_unknown_types_compare_by_raw_text() -> None:
    old = [_prop("a", UnknownPropType("vec3"))]
    new = [_prop("b", UnknownPropType("vec3"))]

    assert len(diff_properties(old, new).renamed) == 1

    other = [_prop("b", UnknownPropType("vec2"))]
    assert diff_properties(old, other).renamed == ()
