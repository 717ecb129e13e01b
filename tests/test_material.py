import pytest

from litscript.color import Color
from litscript.draw import Pixel, Rectangle, Square, as_int_set
from litscript.errors import ImproperDimensions
from litscript.material import DIMENSION_MAX, ImageMaterial, Prepared, Unprepared

RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)


def test_color_rgba_and_transparency():
    assert RED.as_rgba() == (255, 0, 0, 255)
    assert Color(9, 9, 9, is_transparent=True).as_rgba() == (0, 0, 0, 0)


def test_draw_instructions_flatten_to_nine_ints():
    assert as_int_set(Pixel(1, 2, RED)) == (1, 1, 2, 1, 1, 255, 0, 0, 255)
    assert as_int_set(Rectangle(0, 1, 3, 4, BLUE)) == (2, 0, 1, 3, 4, 0, 0, 255, 255)
    assert as_int_set(Square(2, 2, 5, RED)) == (3, 2, 2, 5, 5, 255, 0, 0, 255)


def test_new_material_is_unprepared_and_empty():
    material = ImageMaterial(4, 3, RED)

    assert material.state == Unprepared()
    assert not material.is_prepared
    assert material.draws == []
    assert str(material) == "4x3 Image"
    with pytest.raises(RuntimeError, match="not been prepared"):
        material.buffer


@pytest.mark.parametrize("width,height", [(-1, 1), (1, DIMENSION_MAX + 1)])
def test_dimensions_must_be_in_range(width, height):
    with pytest.raises(ImproperDimensions):
        ImageMaterial(width, height, RED)


def test_prepare_lists_most_recent_instruction_first():
    material = ImageMaterial(4, 4, Color(0, 0, 0))
    material.draw_pixel(0, 0, RED)
    material.draw_rectangle(1, 1, 2, 2, BLUE)

    buffer = material.prepare()

    assert isinstance(material.state, Prepared)
    assert buffer[:9] == as_int_set(Rectangle(1, 1, 2, 2, BLUE))
    assert buffer[9:] == as_int_set(Pixel(0, 0, RED))


def test_prepare_is_idempotent_until_next_draw():
    material = ImageMaterial(2, 2, Color(0, 0, 0))
    material.draw_pixel(0, 0, RED)

    first = material.prepare()
    assert material.prepare() is first
    assert material.prepare_count == 1

    material.draw_square(0, 0, 2, BLUE)
    assert not material.is_prepared

    assert len(material.prepare()) == 18
    assert material.prepare_count == 2


def test_with_dependencies_copies_draws_and_starts_unprepared():
    material = ImageMaterial(2, 2, RED)
    material.draw_pixel(1, 1, BLUE)
    material.prepare()

    bound = material.with_dependencies((3, 4))

    assert bound is not material
    assert bound.dependencies == (3, 4)
    assert bound.draws == material.draws
    assert not bound.is_prepared
    assert material.dependencies == ()
