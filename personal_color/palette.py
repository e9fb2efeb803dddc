from functools import lru_cache
from types import MappingProxyType

import pandas as pd

from .color_math import hex_to_lab, hex_to_rgb, normalize_hex
from .models import GROUPS, SEASONS, Group, PaletteColor, Season

# season -> group -> [(name, hex)], 5 colours per group
PALETTE_TABLE = {
    "spring": {
        "neutrals": [
            ("Warm ivory", "#F6EAD7"),
            ("Cream", "#FFF1D6"),
            ("Light camel", "#D8B58A"),
            ("Soft beige", "#E6D2B5"),
            ("Golden sand", "#D9B77C"),
        ],
        "accents": [
            ("Coral", "#FF6F61"),
            ("Peach", "#FFB38A"),
            ("Warm rose", "#E88A8A"),
            ("Apricot", "#FF9F6B"),
            ("Melon", "#FF8C69"),
        ],
        "brights": [
            ("Cantaloupe", "#FFA64D"),
            ("Warm yellow", "#FFD84D"),
            ("Bright aqua", "#2ECED0"),
            ("Light turquoise", "#5ED6C1"),
            ("Sunny gold", "#FFC83D"),
        ],
        "softs": [
            ("Mint", "#BFE6C7"),
            ("Soft peach", "#FFD1B3"),
            ("Light warm pink", "#F6B7B2"),
            ("Soft teal", "#7FCFC3"),
            ("Buttercream", "#FFF0B3"),
        ],
    },
    "summer": {
        "neutrals": [
            ("Cool ivory", "#F2F0EB"),
            ("Soft gray", "#C8C8D0"),
            ("Rose beige", "#E3D5D2"),
            ("Misty taupe", "#CDC4C1"),
            ("Silver frost", "#DDE1E8"),
        ],
        "accents": [
            ("Dusty rose", "#D8A7A7"),
            ("Mauve", "#C8A2C8"),
            ("Soft berry", "#B58CA5"),
            ("Lavender", "#C7B8E0"),
            ("Ballet pink", "#F4C5C9"),
        ],
        "brights": [
            ("Periwinkle", "#8FA4E8"),
            ("Cool aqua", "#8FD6D5"),
            ("Powder blue", "#AFC8E7"),
            ("Soft fuchsia", "#D66DA3"),
            ("Strawberry ice", "#E87BAA"),
        ],
        "softs": [
            ("Blue gray", "#B7C4CF"),
            ("Misty blue", "#C6D7E2"),
            ("Heather", "#D8CBE2"),
            ("Soft lilac", "#E7D6F5"),
            ("Cloud pink", "#F7DDE3"),
        ],
    },
    "autumn": {
        "neutrals": [
            ("Warm beige", "#E8CFA6"),
            ("Camel", "#C1A16B"),
            ("Olive taupe", "#B6A892"),
            ("Caramel", "#B78B57"),
            ("Soft olive", "#A89F80"),
        ],
        "accents": [
            ("Terracotta", "#C96541"),
            ("Rust", "#B4441C"),
            ("Burnt sienna", "#A85F3D"),
            ("Mustard", "#D3A63C"),
            ("Warm olive", "#8E8C53"),
        ],
        "brights": [
            ("Pumpkin", "#F18F01"),
            ("Marigold", "#FFC145"),
            ("Moss green", "#8FAE3E"),
            ("Teal", "#1B998B"),
            ("Brick red", "#A23E3D"),
        ],
        "softs": [
            ("Sage", "#C4C8A8"),
            ("Dusty olive", "#A3A380"),
            ("Clay", "#C9A28C"),
            ("Soft terracotta", "#D1A38A"),
            ("Muted gold", "#D6BA6A"),
        ],
    },
    "winter": {
        "neutrals": [
            ("Snow white", "#FFFFFF"),
            ("Cool black", "#0A0A0A"),
            ("Charcoal", "#333333"),
            ("Silver gray", "#BFC3C9"),
            ("Blue-gray", "#8A97A8"),
        ],
        "accents": [
            ("Fuchsia", "#E3007E"),
            ("Berry", "#B8004E"),
            ("Royal purple", "#5A2D82"),
            ("Crimson", "#D1002C"),
            ("Electric magenta", "#FF1B8D"),
        ],
        "brights": [
            ("True red", "#FF0000"),
            ("Sapphire blue", "#0F52BA"),
            ("Emerald", "#009975"),
            ("Icy teal", "#4BC6B9"),
            ("Lemon ice", "#F2FF6E"),
        ],
        "softs": [
            ("Icy lavender", "#D6D4F7"),
            ("Ice pink", "#F6D3E6"),
            ("Frost blue", "#D8EAFE"),
            ("Soft wine", "#C79CA6"),
            ("Cool plum", "#836283"),
        ],
    },
}


@lru_cache(maxsize=1)
def get_palette():
    """
    season -> group -> tuple of PaletteColor, Lab computed once.
    Built on first use and shared read-only afterwards.
    """
    palette = {}
    for season in SEASONS:
        groups = {}
        for group in GROUPS:
            groups[group] = tuple(
                PaletteColor(name=name, hex=normalize_hex(hex_code), lab=hex_to_lab(hex_code),
                             season=season, group=group)
                for name, hex_code in PALETTE_TABLE[season.value][group.value]
            )
        palette[season] = MappingProxyType(groups)
    return MappingProxyType(palette)


@lru_cache(maxsize=1)
def iter_palette():
    """All palette colours flattened in declaration order (season, group, entry)."""
    palette = get_palette()
    return tuple(
        color
        for season in SEASONS
        for group in GROUPS
        for color in palette[season][group]
    )


def season_colors(season):
    season = Season(season)
    palette = get_palette()
    return tuple(color for group in GROUPS for color in palette[season][group])


def group_colors(season, group):
    return get_palette()[Season(season)][Group(group)]


def palette_frame(season=None):
    """
    Palette as a DataFrame with R, G, B, L*, a*, b* columns.
    A fresh copy on every call.
    """
    colors = iter_palette() if season is None else season_colors(season)
    rows = []
    for color in colors:
        rgb = hex_to_rgb(color.hex)
        rows.append({
            "season": color.season.value,
            "group": color.group.value,
            "name": color.name,
            "hex": color.hex,
            "R": rgb.r,
            "G": rgb.g,
            "B": rgb.b,
            "L*": color.lab.L,
            "a*": color.lab.a,
            "b*": color.lab.b,
        })
    return pd.DataFrame(rows)


def load_all_palettes():
    """spring/summer/autumn/winter -> DataFrame"""
    return {season.value: palette_frame(season) for season in SEASONS}
