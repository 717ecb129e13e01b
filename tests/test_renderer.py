import pytest

from litscript.color import Color
from litscript.material import ImageMaterial
from litscript.renderer import SoftwareRenderer

BLACK = Color(0, 0, 0)
RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)


def render(material: ImageMaterial):
    material.prepare()
    return SoftwareRenderer().build_resource(material)


def test_background_fills_every_pixel():
    texture = render(ImageMaterial(3, 2, Color(1, 2, 3)))

    assert len(texture.pixels) == 3 * 2 * 4
    assert {texture.pixel(x, y) for x in range(3) for y in range(2)} == {(1, 2, 3, 255)}


def test_transparent_background_is_zeroed():
    texture = render(ImageMaterial(1, 1, Color(7, 7, 7, is_transparent=True)))
    assert texture.pixel(0, 0) == (0, 0, 0, 0)


def test_rectangle_and_pixel_are_rasterized():
    material = ImageMaterial(4, 4, BLACK)
    material.draw_rectangle(1, 1, 2, 2, RED)
    material.draw_pixel(3, 0, GREEN)

    texture = render(material)

    assert texture.pixel(1, 1) == texture.pixel(2, 2) == (255, 0, 0, 255)
    assert texture.pixel(3, 3) == (0, 0, 0, 255)
    assert texture.pixel(3, 0) == (0, 255, 0, 255)


def test_later_instructions_cover_earlier_ones():
    material = ImageMaterial(3, 3, BLACK)
    material.draw_square(0, 0, 3, RED)
    material.draw_pixel(1, 1, GREEN)

    texture = render(material)

    assert texture.pixel(1, 1) == (0, 255, 0, 255)
    assert texture.pixel(0, 0) == (255, 0, 0, 255)


def test_shapes_are_clipped_to_the_image():
    material = ImageMaterial(2, 2, BLACK)
    material.draw_rectangle(-1, 1, 10, 10, RED)
    material.draw_pixel(5, 5, GREEN)

    texture = render(material)

    assert texture.pixel(0, 1) == texture.pixel(1, 1) == (255, 0, 0, 255)
    assert texture.pixel(0, 0) == (0, 0, 0, 255)


def test_pixel_lookup_outside_texture_raises():
    texture = render(ImageMaterial(1, 1, BLACK))
    with pytest.raises(IndexError):
        texture.pixel(1, 0)


def test_building_requires_a_prepared_material():
    with pytest.raises(RuntimeError):
        SoftwareRenderer().build_resource(ImageMaterial(1, 1, BLACK))


def test_release_marks_texture_and_counts():
    renderer = SoftwareRenderer()
    material = ImageMaterial(1, 1, BLACK)
    material.prepare()
    texture = renderer.build_resource(material)

    renderer.release_resource(texture)

    assert texture.released
    assert (renderer.built, renderer.released) == (1, 1)
