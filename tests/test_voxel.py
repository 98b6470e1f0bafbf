import pytest

from ferrite.voxel import Material, Voxel


def test_air_is_default():
    assert Voxel() == Voxel.AIR
    assert Voxel.AIR.is_air()
    assert not Voxel.AIR.is_solid()


def test_solid_voxel():
    v = Voxel(1)
    assert not v.is_air()
    assert v.is_solid()


@pytest.mark.parametrize("value", [-1, 1 << 16])
def test_voxel_out_of_range(value):
    with pytest.raises(ValueError):
        Voxel(value)


def test_material_color():
    m = Material.color(10, 20, 30)
    assert m.albedo == (10, 20, 30)
    assert m.roughness == 200
    assert m.metallic == 0
    assert m.emission == 0


def test_material_default_is_grey():
    assert Material() == Material.color(128, 128, 128)


def test_material_rejects_bad_channel():
    with pytest.raises(ValueError):
        Material.color(256, 0, 0)