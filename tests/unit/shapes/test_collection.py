"""Unit tests for ShapeCollection."""

import itertools
from collections import deque
from unittest.mock import Mock

import pytest
from shapely.geometry import Polygon

from spatial_collection.config import CollectionConfig, SpatialContextConfig
from spatial_collection.context import SpatialContext
from spatial_collection.errors import InvalidArgumentError
from spatial_collection.models.enums import SpatialRelation
from spatial_collection.shapes.collection import ShapeCollection


def mock_member(bbox, relation=None, area=0.0):
    """Member double with a real bounding box and a recorded relate()."""
    member = Mock()
    member.bounding_box = bbox
    member.relate.return_value = relation
    member.get_area.return_value = area
    return member


# Construction


def test_empty_members_rejected(ctx):
    """Test that a collection needs at least one member."""
    with pytest.raises(InvalidArgumentError, match="at least 1 shape"):
        ShapeCollection([], ctx)


@pytest.mark.parametrize(
    "make_shapes",
    [
        lambda ctx: (ctx.make_point(i, i) for i in range(3)),
        lambda ctx: {ctx.make_point(0, 0), ctx.make_point(1, 1)},
        lambda ctx: iter([ctx.make_point(0, 0)]),
        lambda ctx: {ctx.make_point(0, 0): 1}.keys(),
        lambda ctx: deque([ctx.make_point(0, 0)]),
    ],
    ids=["generator", "set", "iterator", "dict_keys", "deque"],
)
def test_non_random_access_members_rejected(ctx, make_shapes):
    """Test that inputs without stable positional access are rejected."""
    with pytest.raises(InvalidArgumentError, match="random-access Sequence"):
        ShapeCollection(make_shapes(ctx), ctx)


def test_members_held_by_reference(ctx):
    """Test the member sequence is not copied."""
    shapes = [ctx.make_point(0, 0), ctx.make_point(1, 1)]

    collection = ShapeCollection(shapes, ctx)

    assert collection.shapes is shapes


def test_copy_of_takes_defensive_copy(ctx):
    """Test copy_of accepts any iterable and is independent of the input."""
    shapes = [ctx.make_point(0, 0), ctx.make_point(1, 1)]

    collection = ShapeCollection.copy_of(shapes, ctx)
    shapes.append(ctx.make_point(100, 100))

    assert len(collection) == 2
    assert collection.shapes is not shapes
    assert len(ShapeCollection.copy_of((s for s in shapes), ctx)) == 3


# Bounding box


def test_bounding_box_encloses_every_member(ctx):
    """Test the bounding box is the tightest box around all members."""
    shapes = [
        ctx.make_rectangle(0, 2, 0, 2),
        ctx.make_point(-3, 5),
        ctx.make_circle(ctx.make_point(10, 10), 1),
        ctx.make_polygon(Polygon([(4, -6), (6, -6), (5, -4)])),
    ]

    bbox = ShapeCollection(shapes, ctx).bounding_box

    assert (bbox.min_x, bbox.max_x, bbox.min_y, bbox.max_y) == (-3, 11, -6, 11)
    for shape in shapes:
        assert bbox.relate(shape.bounding_box) is SpatialRelation.CONTAINS


def test_bounding_box_is_order_independent(ctx):
    """Test every member order yields the same bounding box."""
    shapes = [
        ctx.make_rectangle(0, 2, 0, 2),
        ctx.make_rectangle(5, 7, -1, 1),
        ctx.make_point(3, 9),
    ]

    boxes = {ShapeCollection(list(p), ctx).bounding_box for p in itertools.permutations(shapes)}

    assert len(boxes) == 1


def test_bounding_box_across_dateline(geo_ctx):
    """Test geographic members either side of the dateline give a crossing box."""
    west = geo_ctx.make_rectangle(170, 175, 0, 10)
    east = geo_ctx.make_rectangle(-175, -170, -5, 5)

    for shapes in ([west, east], [east, west]):
        bbox = ShapeCollection(shapes, geo_ctx).bounding_box

        assert (bbox.min_x, bbox.max_x, bbox.min_y, bbox.max_y) == (170, -170, -5, 10)
        assert bbox.crosses_dateline
        assert bbox.width == 20


def test_bounding_box_wrapping_the_world(geo_ctx):
    """Test members that together circle the globe give a world-wide box."""
    shapes = [
        geo_ctx.make_rectangle(-100, 100, 0, 1),
        geo_ctx.make_rectangle(90, -90, 0, 1),
    ]

    bbox = ShapeCollection(shapes, geo_ctx).bounding_box

    assert (bbox.min_x, bbox.max_x) == (-180, 180)


def test_bounding_box_of_stacked_geo_members(geo_ctx):
    """Test members sharing a longitude range keep that range."""
    shapes = [
        geo_ctx.make_rectangle(0, 10, 0, 10),
        geo_ctx.make_rectangle(0, 10, 20, 30),
    ]
    collection = ShapeCollection(shapes, geo_ctx)
    bbox = collection.bounding_box

    assert (bbox.min_x, bbox.max_x, bbox.min_y, bbox.max_y) == (0, 10, 0, 30)
    query = geo_ctx.make_rectangle(-1, 11, -1, 31)
    assert collection.relate(query) is SpatialRelation.WITHIN


# Relation classification


def test_scenario_contains_and_disjoint_members(ctx):
    """Point inside one member and outside the other: collection contains it."""
    collection = ShapeCollection(
        [ctx.make_rectangle(0, 2, 0, 2), ctx.make_rectangle(5, 7, 5, 7)], ctx
    )

    assert collection.relate(ctx.make_point(1, 1)) is SpatialRelation.CONTAINS


def test_scenario_query_inside_overlapping_members(ctx):
    """Query inside two overlapping members: contained by the collection."""
    collection = ShapeCollection(
        [ctx.make_rectangle(0, 2, 0, 2), ctx.make_rectangle(1, 3, 1, 3)], ctx
    )
    query = ctx.make_rectangle(1.5, 1.6, 1.5, 1.6)

    assert collection.relate(query) is SpatialRelation.CONTAINS
    assert query.relate(collection) is SpatialRelation.WITHIN


def test_scenario_bbox_within_query_short_circuits(ctx):
    """Bounding box inside the query: WITHIN without visiting members."""
    bbox = ctx.make_rectangle(0, 1, 0, 1)
    members = [mock_member(bbox), mock_member(bbox)]
    collection = ShapeCollection(members, ctx)

    result = collection.relate(ctx.make_rectangle(-5, 5, -5, 5))

    assert result is SpatialRelation.WITHIN
    for member in members:
        member.relate.assert_not_called()


def test_bbox_disjoint_short_circuits(ctx):
    """Bounding box disjoint from the query: DISJOINT without visiting members."""
    member = mock_member(ctx.make_rectangle(0, 1, 0, 1), SpatialRelation.INTERSECTS)
    collection = ShapeCollection([member], ctx)

    assert collection.relate(ctx.make_point(50, 50)) is SpatialRelation.DISJOINT
    member.relate.assert_not_called()


def test_scenario_intersecting_member_stops_the_fold(ctx):
    """First member intersects the query: INTERSECTS, later members skipped."""
    first = ctx.make_rectangle(0, 1, 0, 1)
    second = mock_member(ctx.make_rectangle(10, 11, 10, 11), SpatialRelation.WITHIN)
    collection = ShapeCollection([first, second], ctx)

    result = collection.relate(ctx.make_rectangle(0.5, 10.5, 0.5, 10.5))

    assert result is SpatialRelation.INTERSECTS
    second.relate.assert_not_called()


@pytest.mark.parametrize(
    ("relations", "expected"),
    [
        ((SpatialRelation.DISJOINT, SpatialRelation.DISJOINT), SpatialRelation.DISJOINT),
        ((SpatialRelation.DISJOINT, SpatialRelation.CONTAINS), SpatialRelation.CONTAINS),
        ((SpatialRelation.CONTAINS, SpatialRelation.DISJOINT), SpatialRelation.CONTAINS),
        ((SpatialRelation.CONTAINS, SpatialRelation.CONTAINS), SpatialRelation.CONTAINS),
        ((SpatialRelation.WITHIN, SpatialRelation.WITHIN), SpatialRelation.WITHIN),
        ((SpatialRelation.DISJOINT, SpatialRelation.WITHIN), SpatialRelation.INTERSECTS),
        ((SpatialRelation.WITHIN, SpatialRelation.DISJOINT), SpatialRelation.INTERSECTS),
        ((SpatialRelation.WITHIN, SpatialRelation.CONTAINS), SpatialRelation.INTERSECTS),
        ((SpatialRelation.CONTAINS, SpatialRelation.WITHIN), SpatialRelation.INTERSECTS),
        (
            (SpatialRelation.CONTAINS, SpatialRelation.DISJOINT, SpatialRelation.WITHIN),
            SpatialRelation.INTERSECTS,
        ),
        (
            (SpatialRelation.DISJOINT, SpatialRelation.DISJOINT, SpatialRelation.CONTAINS),
            SpatialRelation.CONTAINS,
        ),
    ],
)
def test_fold_transitions(ctx, relations, expected):
    """Test the fold over member relations in every listed order."""
    bbox = ctx.make_rectangle(0, 10, 0, 10)
    query = ctx.make_rectangle(2, 3, 2, 3)

    for order in itertools.permutations(relations):
        members = [mock_member(bbox, relation) for relation in order]
        assert ShapeCollection(members, ctx).relate(query) is expected


def test_contains_does_not_stop_the_fold(ctx):
    """Test every member is visited after a CONTAINS, since members may overlap."""
    bbox = ctx.make_rectangle(0, 10, 0, 10)
    members = [
        mock_member(bbox, SpatialRelation.CONTAINS),
        mock_member(bbox, SpatialRelation.DISJOINT),
        mock_member(bbox, SpatialRelation.CONTAINS),
    ]

    ShapeCollection(members, ctx).relate(ctx.make_rectangle(2, 3, 2, 3))

    for member in members:
        member.relate.assert_called_once()


def test_intersecting_member_poisons_any_order(ctx):
    """Test one intersecting member makes the collection intersect."""
    bbox = ctx.make_rectangle(0, 10, 0, 10)
    relations = [
        SpatialRelation.CONTAINS,
        SpatialRelation.DISJOINT,
        SpatialRelation.INTERSECTS,
        SpatialRelation.DISJOINT,
    ]
    query = ctx.make_rectangle(2, 3, 2, 3)

    for order in itertools.permutations(relations):
        members = [mock_member(bbox, relation) for relation in order]
        assert ShapeCollection(members, ctx).relate(query) is SpatialRelation.INTERSECTS


@pytest.fixture
def mixed_shapes(ctx):
    return [
        ctx.make_rectangle(0, 2, 0, 2),
        ctx.make_rectangle(1, 3, 1, 3),
        ctx.make_rectangle(5, 7, 5, 7),
        ctx.make_point(10, 10),
        ctx.make_circle(ctx.make_point(4, 4), 1),
    ]


@pytest.mark.parametrize(
    "make_query",
    [
        lambda ctx: ctx.make_point(1, 1),
        lambda ctx: ctx.make_point(10, 10),
        lambda ctx: ctx.make_point(8, 8),
        lambda ctx: ctx.make_rectangle(1.5, 1.6, 1.5, 1.6),
        lambda ctx: ctx.make_rectangle(-1, 20, -1, 20),
        lambda ctx: ctx.make_rectangle(6, 12, 6, 12),
        lambda ctx: ctx.make_rectangle(8, 9, 8, 9),
        lambda ctx: ctx.make_circle(ctx.make_point(6, 6), 0.5),
        lambda ctx: ctx.make_circle(ctx.make_point(1, 1), 30),
    ],
)
def test_relate_is_order_independent(ctx, mixed_shapes, make_query):
    """Test every permutation of members gives the same relation."""
    query = make_query(ctx)

    results = {
        ShapeCollection(list(order), ctx).relate(query)
        for order in itertools.permutations(mixed_shapes)
    }

    assert len(results) == 1


def test_relate_member_point(ctx):
    """Test a query equal to a member point intersects the collection."""
    collection = ShapeCollection([ctx.make_point(0, 0), ctx.make_point(4, 2)], ctx)

    assert collection.relate(ctx.make_point(4, 2)) is SpatialRelation.INTERSECTS
    assert collection.relate(ctx.make_point(2, 1)) is SpatialRelation.DISJOINT


def test_relate_concrete_shapes(ctx, mixed_shapes):
    """Test relations of a mixed collection against real query shapes."""
    collection = ShapeCollection(mixed_shapes, ctx)

    assert collection.relate(ctx.make_point(10, 10)) is SpatialRelation.INTERSECTS
    assert collection.relate(ctx.make_point(8, 8)) is SpatialRelation.DISJOINT
    assert collection.relate(ctx.make_rectangle(-1, 20, -1, 20)) is SpatialRelation.WITHIN
    assert collection.relate(ctx.make_rectangle(6, 12, 6, 12)) is SpatialRelation.INTERSECTS


def test_relate_across_dateline(geo_ctx):
    """Test a point inside the bounding box gap is still disjoint."""
    collection = ShapeCollection(
        [geo_ctx.make_rectangle(170, 175, 0, 10), geo_ctx.make_rectangle(-175, -170, 0, 10)],
        geo_ctx,
    )

    assert collection.relate(geo_ctx.make_point(180, 5)) is SpatialRelation.DISJOINT
    assert collection.relate(geo_ctx.make_point(172, 5)) is SpatialRelation.CONTAINS
    assert collection.relate(geo_ctx.make_point(-172, 5)) is SpatialRelation.CONTAINS


def test_nested_collections(ctx):
    """Test a collection can be a member of, and relate to, another collection."""
    inner = ShapeCollection([ctx.make_rectangle(0, 1, 0, 1), ctx.make_rectangle(2, 3, 2, 3)], ctx)
    outer = ShapeCollection([inner, ctx.make_point(10, 10)], ctx)

    assert outer.relate(ctx.make_point(0.5, 0.5)) is SpatialRelation.CONTAINS
    assert outer.relate(ctx.make_point(5, 5)) is SpatialRelation.DISJOINT
    assert ctx.make_rectangle(-1, 4, -1, 4).relate(inner) is SpatialRelation.CONTAINS
    assert outer.relate(inner).intersects()


# Area


def test_area_is_exact_for_non_overlapping_members(ctx):
    """Test area equals the sum when members do not overlap."""
    collection = ShapeCollection(
        [ctx.make_rectangle(0, 1, 0, 1), ctx.make_rectangle(2, 3, 0, 1)], ctx
    )

    assert collection.get_area() == 2


def test_area_capped_at_bounding_box(ctx):
    """Test overlapping members never report more than the bounding box area."""
    rect = ctx.make_rectangle(0, 1, 0, 1)
    collection = ShapeCollection([rect, rect, rect], ctx)

    assert collection.get_area() == 1
    assert collection.get_area() <= collection.bounding_box.get_area()


def test_area_stops_once_cap_reached(ctx):
    """Test remaining members are not summed once the cap is reached."""
    bbox = ctx.make_rectangle(0, 1, 0, 1)
    members = [mock_member(bbox, area=0.6), mock_member(bbox, area=0.6), mock_member(bbox, area=0.1)]

    assert ShapeCollection(members, ctx).get_area() == 1
    members[2].get_area.assert_not_called()


def test_area_geo_bound(geo_ctx):
    """Test geographic areas stay below the spherical bounding box area."""
    rect = geo_ctx.make_rectangle(0, 10, 0, 10)
    collection = ShapeCollection([rect, rect], geo_ctx)

    assert collection.get_area() == pytest.approx(rect.get_area())


# Sequence access, equality and rendering


def test_sequence_access(ctx):
    """Test positional access, length, iteration and slicing."""
    shapes = [ctx.make_point(i, i) for i in range(4)]
    collection = ShapeCollection(shapes, ctx)

    assert len(collection) == 4
    assert collection[0] is shapes[0]
    assert collection[-1] is shapes[-1]
    assert list(collection) == shapes
    assert collection[1:3] == shapes[1:3]
    assert shapes[2] in collection
    assert collection.index(shapes[3]) == 3


def test_center_and_has_area(ctx):
    """Test center is the bounding box center and has_area looks at members."""
    points = ShapeCollection([ctx.make_point(0, 0), ctx.make_point(4, 2)], ctx)
    mixed = ShapeCollection([ctx.make_point(0, 0), ctx.make_rectangle(1, 2, 1, 2)], ctx)

    assert (points.center.x, points.center.y) == (2, 1)
    assert not points.has_area
    assert mixed.has_area


def test_equality_and_hash(ctx):
    """Test collections are equal when their members are equal in order."""
    a = ctx.make_rectangle(0, 1, 0, 1)
    b = ctx.make_point(5, 5)

    assert ShapeCollection([a, b], ctx) == ShapeCollection((a, b), ctx)
    assert hash(ShapeCollection([a, b], ctx)) == hash(ShapeCollection((a, b), ctx))
    assert ShapeCollection([a, b], ctx) != ShapeCollection([b, a], ctx)
    assert ShapeCollection([a], ctx) != a


def test_repr_lists_members(ctx):
    """Test short collections are rendered in full."""
    collection = ShapeCollection([ctx.make_point(1, 2)], ctx)

    assert repr(collection) == "ShapeCollection(PointShape(x=1, y=2))"


def test_repr_elides_past_budget():
    """Test rendering stops once the configured budget is exceeded."""
    ctx = SpatialContext(SpatialContextConfig(), CollectionConfig(render_max_chars=40))
    collection = ShapeCollection([ctx.make_point(i, i) for i in range(10)], ctx)

    rendered = str(collection)

    assert rendered.count("PointShape") == 2
    assert rendered.endswith(" ... )")
