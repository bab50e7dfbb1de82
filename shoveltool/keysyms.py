"""Translation of X11 keysyms into Unicode codepoints and USB HID usages."""

from __future__ import annotations

_KEYPAD_TEXT = {
    0xFF80: 0x20,  # KP_Space
    0xFF89: 0x09,  # KP_Tab
    0xFF8D: 0x0A,  # KP_Enter
    0xFF9F: 0x7F,  # KP_Delete
    0xFFAA: ord("*"),  # KP_Multiply
    0xFFAB: ord("+"),  # KP_Add
    0xFFAC: ord(","),  # KP_Separator
    0xFFAD: ord("-"),  # KP_Subtract
    0xFFAE: ord("."),  # KP_Decimal
    0xFFAF: ord("/"),  # KP_Divide
}

_USB_USAGES = {
    0x0030: 0x00070027,  # 0
    0xFE34: 0x00070028,  # ISO Enter
    0xFD1E: 0x00070028,  # 3270 Enter
    0xFF0D: 0x00070028,  # Enter
    0xFF1B: 0x00070029,  # Escape
    0xFF08: 0x0007002A,  # Backspace
    0xFF09: 0x0007002B,  # Tab
    0x0020: 0x0007002C,  # Space
    0x002D: 0x0007002D,  # Dash
    0x003D: 0x0007002E,  # Equal
    0x005B: 0x0007002F,  # Left Bracket
    0x005D: 0x00070030,  # Right Bracket
    0x005C: 0x00070031,  # Backslash
    0x003B: 0x00070033,  # Semicolon
    0x0027: 0x00070034,  # Apostrophe
    0x0060: 0x00070035,  # Grave
    0x002C: 0x00070036,  # Comma
    0x002E: 0x00070037,  # Dot
    0x002F: 0x00070038,  # Slash
    0xFFAF: 0x00070054,  # KP Slash
    0xFFAA: 0x00070055,  # KP Star
    0xFFAD: 0x00070056,  # KP Dash
    0xFFAB: 0x00070057,  # KP Plus
    0xFF8D: 0x00070058,  # KP Enter
    0xFFB0: 0x00070062,  # KP 0
    0xFFAE: 0x00070063,  # KP Dot
    0xFFBD: 0x00070067,  # KP Equal
    # The keypad may also arrive as its navigation-key aliases.
    0xFF9C: 0x00070059,  # KP 1
    0xFF99: 0x0007005A,  # KP 2
    0xFF9B: 0x0007005B,  # KP 3
    0xFF96: 0x0007005C,  # KP 4
    0xFF9D: 0x0007005D,  # KP 5
    0xFF98: 0x0007005E,  # KP 6
    0xFF95: 0x0007005F,  # KP 7
    0xFF97: 0x00070060,  # KP 8
    0xFF9A: 0x00070061,  # KP 9
    0xFF9E: 0x00070062,  # KP 0
    0xFF9F: 0x00070063,  # KP Dot (Delete)
    0xFFBE: 0x0007003A,  # F1
    0xFFBF: 0x0007003B,  # F2
    0xFFC0: 0x0007003C,  # F3
    0xFFC1: 0x0007003D,  # F4
    0xFFC2: 0x0007003E,  # F5
    0xFFC3: 0x0007003F,  # F6
    0xFFC4: 0x00070040,  # F7
    0xFFC5: 0x00070041,  # F8
    0xFFC6: 0x00070042,  # F9
    0xFFC7: 0x00070043,  # F10
    0xFFC8: 0x00070044,  # F11
    0xFFC9: 0x00070045,  # F12
    0xFFCA: 0x00070068,  # F13
    0xFFCB: 0x00070069,  # F14
    0xFFCC: 0x0007006A,  # F15
    0xFFCD: 0x0007006B,  # F16
    0xFFCE: 0x0007006C,  # F17
    0xFFCF: 0x0007006D,  # F18
    0xFFD0: 0x0007006E,  # F19
    0xFFD1: 0x0007006F,  # F20
    0xFFD2: 0x00070070,  # F21
    0xFFD3: 0x00070071,  # F22
    0xFFD4: 0x00070072,  # F23
    0xFFD5: 0x00070073,  # F24
    0xFF61: 0x00070046,  # Print Screen
    0xFF14: 0x00070047,  # Scroll Lock
    0xFF13: 0x00070048,  # Pause
    0xFF63: 0x00070049,  # Insert
    0xFF50: 0x0007004A,  # Home
    0xFF55: 0x0007004B,  # Page Up
    0xFF57: 0x0007004D,  # End
    0xFF56: 0x0007004E,  # Page Down
    0xFF53: 0x0007004F,  # Right
    0xFF51: 0x00070050,  # Left
    0xFF54: 0x00070051,  # Down
    0xFF52: 0x00070052,  # Up
    0xFF7F: 0x00070053,  # Num Lock
    0xFFFF: 0x0007004C,  # Delete
    0xFF67: 0x00070076,  # Menu
    0xFFE1: 0x000700E1,  # Shift L
    0xFFE2: 0x000700E5,  # Shift R
    0xFFE3: 0x000700E0,  # Control L
    0xFFE4: 0x000700E4,  # Control R
    0xFFE5: 0x00070039,  # Caps Lock
    0xFFE7: 0x000700E3,  # Meta L
    0xFFE8: 0x000700E7,  # Meta R
    0xFFE9: 0x000700E2,  # Alt L
    0xFFEA: 0x000700E6,  # Alt R
    0xFFEB: 0x000700E3,  # Super L
    0xFFEC: 0x000700E7,  # Super R
}


def codepoint_from_keysym(keysym: int) -> int:
    """Return the Unicode codepoint a keysym types, or 0 if it types none."""
    if keysym < 1:
        return 0
    if 0x20 <= keysym <= 0x7E:
        return keysym
    if 0xA1 <= keysym <= 0xFF:
        return keysym
    if keysym & 0xFF000000 == 0x01000000:
        return keysym & 0x00FFFFFF
    if keysym == 0xFE20:  # ISO_Left_Tab, ie Shift+Tab: still a tab.
        return 0x09
    if keysym == 0xFF0D:
        return 0x0A
    if keysym == 0xFFFF:
        return 0x7F
    if 0xFF08 <= keysym <= 0xFF1B:
        return keysym - 0xFF00
    if 0xFFB0 <= keysym <= 0xFFB9:
        return ord("0") + keysym - 0xFFB0
    if 0xFF80 <= keysym <= 0xFFAF:
        return _KEYPAD_TEXT.get(keysym, 0)
    return 0


def usb_usage_from_keysym(keysym: int) -> int:
    """Return the USB HID usage (page 7) for a keysym, or 0 if unknown."""
    if 0x41 <= keysym <= 0x5A:
        return 0x00070004 + keysym - 0x41
    if 0x61 <= keysym <= 0x7A:
        return 0x00070004 + keysym - 0x61
    if 0x31 <= keysym <= 0x39:
        return 0x0007001E + keysym - 0x31
    if 0xFFB1 <= keysym <= 0xFFB9:
        return 0x00070059 + keysym - 0xFFB1
    return _USB_USAGES.get(keysym, 0)