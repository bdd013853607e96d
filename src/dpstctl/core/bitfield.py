"""Pure helpers over the 32-bit FeatureTestControl word.

The DPST bit is inverted: a set bit disables the feature, a clear bit enables
it. Every helper preserves the bits outside the mask and masks its result to
32 bits.
"""

DWORD_MASK = 0xFFFFFFFF

FEATURE_BIT_INDEX = 4


def compute_bit_mask(bit_index: int) -> int:
    """Return a mask with only ``bit_index`` set.

    Raises:
        ValueError: If bit_index is outside 0..31
    """
    if not 0 <= bit_index < 32:
        msg = f"Bit index must be within 0..31, got {bit_index}"
        raise ValueError(msg)
    return 1 << bit_index


FEATURE_BIT_MASK = compute_bit_mask(FEATURE_BIT_INDEX)


def is_feature_enabled(raw_value: int, bit_mask: int) -> bool:
    """Feature is enabled when the masked bit is clear."""
    return raw_value & bit_mask == 0


def clear_bit(raw_value: int, bit_mask: int) -> int:
    """Clear the masked bit (enables the feature)."""
    return raw_value & ~bit_mask & DWORD_MASK


def set_bit(raw_value: int, bit_mask: int) -> int:
    """Set the masked bit (disables the feature)."""
    return (raw_value | bit_mask) & DWORD_MASK


def format_dword(value: int) -> str:
    """Format a value as 8 zero-padded lowercase hex digits, e.g. ``00009240``."""
    return f"{value & DWORD_MASK:08x}"
