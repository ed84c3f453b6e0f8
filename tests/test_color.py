"""Test the batched colorimetry engine.

Tests for colordist.utils.color:
    - sRGB ↔ linear RGB roundtrip and piecewise regions
    - RGB → XYZ → Lab against known values, and the exact inverse
    - Oklab projection against published values
    - ΔE2000 on the Sharma et al. reference pairs
    - ΔE Oklab, luminance, shape/white-point errors

Known values (D65, 2° observer):
    - RGB(1,1,1) → Lab(100, 0, 0), Oklab(1, 0, 0)
    - RGB(0,0,0) → Lab(0, 0, 0)
    - RGB(1,0,0) → Lab(53.24, 80.09, 67.20), Oklab(0.62796, 0.22486, 0.12585)

Run:
    pytest tests/test_color.py -v
"""

import pytest
import torch

from colordist.utils import color


def _t(*values):
    return torch.tensor(values, dtype=torch.float64)


# ============================================================================
# TRANSFER FUNCTIONS
# ============================================================================

def test_srgb_linear_roundtrip():
    """Test sRGB → linear → sRGB is the identity on [0,1]."""
    torch.manual_seed(123)
    srgb = torch.rand(64, 3, dtype=torch.float64)
    back = color.linear_to_srgb(color.srgb_to_linear(srgb))
    assert torch.allclose(srgb, back, atol=1e-12)


def test_srgb_to_linear_linear_region():
    """Test small values use x / 12.92."""
    small = _t(0.01, 0.02, 0.04045)
    assert torch.allclose(color.srgb_to_linear(small), small / 12.92, atol=1e-15)


def test_srgb_to_linear_power_region():
    """Test mid gray uses the 2.4 power segment."""
    mid = _t(0.5, 0.5, 0.5)
    expected = ((0.5 + 0.055) / 1.055) ** 2.4
    assert torch.allclose(color.srgb_to_linear(mid), torch.full((3,), expected, dtype=torch.float64))


def test_linear_to_srgb_clamps_out_of_gamut():
    """Test linear values outside [0,1] encode to the cube boundary."""
    out = color.linear_to_srgb(_t(-0.2, 0.5, 1.7))
    assert out[0].item() == 0.0
    assert out[2].item() == pytest.approx(1.0, abs=1e-12)
    assert 0.0 < out[1].item() < 1.0


def test_luminance_linear():
    """Test Rec. 709 luminance of white, black and pure green."""
    rgb = torch.stack([_t(1, 1, 1), _t(0, 0, 0), _t(0, 1, 0)])
    lum = color.luminance_linear(rgb)
    assert lum.shape == (3,)
    assert lum[0].item() == pytest.approx(1.0, abs=1e-9)
    assert lum[1].item() == 0.0
    assert lum[2].item() == pytest.approx(0.7152)


def test_luminance_invalid_shape():
    """Test luminance raises on a missing channel axis."""
    with pytest.raises(ValueError, match="Expected shape"):
        color.luminance_linear(torch.rand(4, 2))


# ============================================================================
# XYZ / LAB
# ============================================================================

def test_rgb_to_xyz_white_is_d65():
    """Test linear white maps to the D65 white point (Y row sums to 1.0000001)."""
    xyz = color.rgb_to_xyz(_t(1.0, 1.0, 1.0))
    assert torch.allclose(xyz, _t(*color.WHITE_POINTS["D65"]), atol=1e-6)


def test_xyz_rgb_matrices_are_inverse():
    """Test the derived inverse matrix undoes the forward matrix."""
    torch.manual_seed(7)
    rgb = torch.rand(32, 3, dtype=torch.float64)
    assert torch.allclose(color.xyz_to_rgb(color.rgb_to_xyz(rgb)), rgb, atol=1e-12)


def test_srgb_to_lab_known_values():
    """Test white, black and primary red."""
    lab = color.srgb_to_lab(torch.stack([_t(1, 1, 1), _t(0, 0, 0), _t(1, 0, 0)]))
    assert torch.allclose(lab[0], _t(100.0, 0.0, 0.0), atol=1e-4)
    assert torch.allclose(lab[1], _t(0.0, 0.0, 0.0), atol=1e-12)
    assert torch.allclose(lab[2], _t(53.2408, 80.0925, 67.2032), atol=0.01)


def test_xyz_to_lab_d50_white():
    """Test the D50 white point normalizes D50 white to L=100."""
    lab = color.xyz_to_lab(_t(*color.WHITE_POINTS["D50"]), white_point="D50")
    assert torch.allclose(lab, _t(100.0, 0.0, 0.0), atol=1e-9)


def test_xyz_to_lab_unknown_white_point():
    """Test unknown white point names are rejected."""
    with pytest.raises(ValueError, match="Unknown white_point"):
        color.xyz_to_lab(_t(0.5, 0.5, 0.5), white_point="A")


def test_xyz_to_lab_dark_values_use_linear_branch():
    """Test XYZ below (6/29)^3 takes the linear segment (L = 903.3 * Y)."""
    y = 0.001
    lab = color.xyz_to_lab(_t(0.95047 * y, y, 1.08883 * y))
    assert lab[0].item() == pytest.approx(116.0 * (y / (3 * (6 / 29) ** 2) + 4 / 29) - 16.0)
    assert lab[0].item() == pytest.approx(903.3 * y, rel=1e-3)


def test_lab_srgb_roundtrip():
    """Test Lab → sRGB inverts sRGB → Lab inside the gamut."""
    torch.manual_seed(11)
    srgb = torch.rand(128, 3, dtype=torch.float64)
    back = color.lab_to_srgb(color.srgb_to_lab(srgb))
    assert torch.allclose(back, srgb, atol=1e-9)


def test_lab_to_srgb_clamps_out_of_gamut():
    """Test Lab far outside sRGB lands in the unit cube."""
    lab = torch.stack([_t(50.0, 150.0, -150.0), _t(120.0, 0.0, 0.0), _t(-10.0, 40.0, 40.0)])
    rgb = color.lab_to_srgb(lab)
    assert torch.all(rgb >= 0.0) and torch.all(rgb <= 1.0)


def test_lab_to_xyz_batched_shape():
    """Test leading dimensions are preserved."""
    lab = torch.zeros(2, 5, 3, dtype=torch.float64)
    assert color.lab_to_xyz(lab).shape == (2, 5, 3)


def test_rgb_to_xyz_invalid_shape():
    """Test channel-first input is rejected."""
    with pytest.raises(ValueError, match="Expected shape"):
        color.rgb_to_xyz(torch.rand(3, 4, 4))


# ============================================================================
# OKLAB
# ============================================================================

def test_oklab_white_and_black():
    """Test white → (1, 0, 0) and black → (0, 0, 0)."""
    ok = color.srgb_to_oklab(torch.stack([_t(1, 1, 1), _t(0, 0, 0)]))
    assert torch.allclose(ok[0], _t(1.0, 0.0, 0.0), atol=1e-6)
    assert torch.allclose(ok[1], _t(0.0, 0.0, 0.0), atol=1e-12)


def test_oklab_primaries_known_values():
    """Test sRGB primaries against Ottosson's published Oklab values."""
    ok = color.srgb_to_oklab(torch.stack([_t(1, 0, 0), _t(0, 1, 0), _t(0, 0, 1)]))
    assert torch.allclose(ok[0], _t(0.627955, 0.224863, 0.125846), atol=1e-3)
    assert torch.allclose(ok[1], _t(0.866440, -0.233888, 0.179498), atol=1e-3)
    assert torch.allclose(ok[2], _t(0.452014, -0.032457, -0.311528), atol=1e-3)


def test_lab_to_oklab_matches_srgb_path():
    """Test Lab input is projected through sRGB."""
    srgb = _t(0.8, 0.4, 0.2)
    via_lab = color.lab_to_oklab(color.srgb_to_lab(srgb))
    assert torch.allclose(via_lab, color.srgb_to_oklab(srgb), atol=1e-9)


# ============================================================================
# ΔE2000
# ============================================================================

# Sharma, Wu, Dalal (2005), Table 1: (Lab1, Lab2, ΔE00)
SHARMA_PAIRS = [
    ((50.0000, 2.6772, -79.7751), (50.0000, 0.0000, -82.7485), 2.0425),
    ((50.0000, 3.1571, -77.2803), (50.0000, 0.0000, -82.7485), 2.8615),
    ((50.0000, 2.8361, -74.0200), (50.0000, 0.0000, -82.7485), 3.4412),
    ((50.0000, -1.3802, -84.2814), (50.0000, 0.0000, -82.7485), 1.0000),
    ((50.0000, -1.1848, -84.8006), (50.0000, 0.0000, -82.7485), 1.0000),
    ((50.0000, -0.9009, -85.5211), (50.0000, 0.0000, -82.7485), 1.0000),
    ((50.0000, 0.0000, 0.0000), (50.0000, -1.0000, 2.0000), 2.3669),
    ((50.0000, -1.0000, 2.0000), (50.0000, 0.0000, 0.0000), 2.3669),
    ((50.0000, 2.4900, -0.0010), (50.0000, -2.4900, 0.0009), 7.1792),
    ((50.0000, 2.4900, -0.0010), (50.0000, -2.4900, 0.0010), 7.1792),
    ((50.0000, 2.4900, -0.0010), (50.0000, -2.4900, 0.0011), 7.2195),
    ((50.0000, 2.4900, -0.0010), (50.0000, -2.4900, 0.0012), 7.2195),
    ((50.0000, -0.0010, 2.4900), (50.0000, 0.0009, -2.4900), 4.8045),
    ((50.0000, -0.0010, 2.4900), (50.0000, 0.0010, -2.4900), 4.8045),
    ((50.0000, -0.0010, 2.4900), (50.0000, 0.0011, -2.4900), 4.7461),
    ((50.0000, 2.5000, 0.0000), (50.0000, 0.0000, -2.5000), 4.3065),
    ((50.0000, 2.5000, 0.0000), (73.0000, 25.0000, -18.0000), 27.1492),
    ((50.0000, 2.5000, 0.0000), (61.0000, -5.0000, 29.0000), 22.8977),
    ((50.0000, 2.5000, 0.0000), (56.0000, -27.0000, -3.0000), 31.9030),
    ((50.0000, 2.5000, 0.0000), (58.0000, 24.0000, 15.0000), 19.4535),
    ((50.0000, 2.5000, 0.0000), (50.0000, 3.1736, 0.5854), 1.0000),
    ((50.0000, 2.5000, 0.0000), (50.0000, 3.2972, 0.0000), 1.0000),
    ((50.0000, 2.5000, 0.0000), (50.0000, 1.8634, 0.5757), 1.0000),
    ((50.0000, 2.5000, 0.0000), (50.0000, 3.2592, 0.3350), 1.0000),
    ((60.2574, -34.0099, 36.2677), (60.4626, -34.1751, 39.4387), 1.2644),
    ((63.0109, -31.0961, -5.8663), (62.8187, -29.7946, -4.0864), 1.2630),
    ((61.2901, 3.7196, -5.3901), (61.4292, 2.2480, -4.9620), 1.8731),
    ((35.0831, -44.1164, 3.7933), (35.0232, -40.0716, 1.5901), 1.8645),
    ((22.7233, 20.0904, -46.6940), (23.0331, 14.9730, -42.5619), 2.0373),
    ((36.4612, 47.8580, 18.3852), (36.2715, 50.5065, 21.2231), 1.4146),
    ((90.8027, -2.0831, 1.4410), (91.1528, -1.6435, 0.0447), 1.4441),
    ((90.9257, -0.5406, -0.9208), (88.6381, -0.8985, -0.7239), 1.5381),
    ((6.7747, -0.2908, -2.4247), (5.8714, -0.0985, -2.2286), 0.6377),
    ((2.0776, 0.0795, -1.1350), (0.9033, -0.0636, -0.5514), 0.9082),
]


@pytest.mark.parametrize("lab1, lab2, expected", SHARMA_PAIRS)
def test_delta_e2000_reference_pairs(lab1, lab2, expected):
    """Test each published pair to 4 decimals, in both argument orders."""
    a, b = _t(*lab1), _t(*lab2)
    assert color.delta_e2000(a, b).item() == pytest.approx(expected, abs=1e-4)
    assert color.delta_e2000(b, a).item() == pytest.approx(expected, abs=1e-4)


def test_delta_e2000_batched_matches_table():
    """Test one batched call reproduces the whole table."""
    lab1 = torch.tensor([p[0] for p in SHARMA_PAIRS], dtype=torch.float64)
    lab2 = torch.tensor([p[1] for p in SHARMA_PAIRS], dtype=torch.float64)
    expected = torch.tensor([p[2] for p in SHARMA_PAIRS], dtype=torch.float64)
    de = color.delta_e2000(lab1, lab2)
    assert de.shape == (len(SHARMA_PAIRS),)
    assert torch.allclose(de, expected, atol=1e-4)


def test_delta_e2000_identical_zero():
    """Test identical inputs give exactly zero, including neutrals."""
    torch.manual_seed(5)
    lab = color.srgb_to_lab(torch.rand(50, 3, dtype=torch.float64))
    lab = torch.cat([lab, _t(50.0, 0.0, 0.0).unsqueeze(0)])
    de = color.delta_e2000(lab, lab)
    assert torch.all(de == 0.0)


def test_delta_e2000_weights_scale_lightness():
    """Test kL divides a pure lightness difference."""
    a, b = _t(50.0, 0.0, 0.0), _t(60.0, 0.0, 0.0)
    base = color.delta_e2000(a, b).item()
    assert color.delta_e2000(a, b, kL=2.0).item() == pytest.approx(base / 2.0)
    assert color.delta_e2000(a, b, kC=2.0, kH=2.0).item() == pytest.approx(base)


def test_delta_e2000_non_negative_and_finite():
    """Test random Lab pairs give finite non-negative results."""
    torch.manual_seed(99)
    lab1 = torch.rand(200, 3, dtype=torch.float64) * _t(100.0, 256.0, 256.0) - _t(0.0, 128.0, 128.0)
    lab2 = torch.rand(200, 3, dtype=torch.float64) * _t(100.0, 256.0, 256.0) - _t(0.0, 128.0, 128.0)
    de = color.delta_e2000(lab1, lab2)
    assert torch.all(torch.isfinite(de))
    assert torch.all(de >= 0.0)


# ============================================================================
# ΔE OKLAB
# ============================================================================

def test_delta_e_oklab_black_white():
    """Test black to white is the Oklab lightness range."""
    ok = color.srgb_to_oklab(torch.stack([_t(0, 0, 0), _t(1, 1, 1)]))
    assert color.delta_e_oklab(ok[0], ok[1]).item() == pytest.approx(1.0, abs=1e-6)


def test_delta_e_oklab_broadcasts():
    """Test one reference against many samples."""
    ref = _t(0.5, 0.0, 0.0)
    samples = torch.stack([_t(0.5, 0.0, 0.0), _t(0.5, 0.3, 0.4)])
    d = color.delta_e_oklab(ref, samples)
    assert d.shape == (2,)
    assert d[0].item() == 0.0
    assert d[1].item() == pytest.approx(0.5)
