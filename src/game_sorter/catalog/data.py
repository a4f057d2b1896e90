"""
Curated filter tables.

Ids are the upstream catalogs' own identifiers. The tables are
immutable and passed to FilterCatalogProvider at construction.
"""

from game_sorter.upstream.contracts import FilterOption

# RAWG genre ids
CURATED_RAWG_GENRES: tuple[FilterOption, ...] = (
    FilterOption(id=14, name="Simulation"),
    FilterOption(id=10, name="Strategy"),
    FilterOption(id=5, name="RPG"),
    FilterOption(id=1, name="Racing"),
    FilterOption(id=15, name="Sports"),
    FilterOption(id=7, name="Puzzle"),
    # Beat 'em up lives under Arcade on RAWG
    FilterOption(id=11, name="Arcade"),
    FilterOption(id=3, name="Adventure"),
    FilterOption(id=83, name="Platformer"),
    FilterOption(id=6, name="Fighting"),
)

# Giant Bomb genre ids
CURATED_GIANTBOMB_GENRES: tuple[FilterOption, ...] = (
    FilterOption(id=1, name="Action"),
    FilterOption(id=4, name="Adventure"),
    FilterOption(id=5, name="Role-Playing"),
    FilterOption(id=3, name="Simulation"),
    FilterOption(id=2, name="Strategy"),
    FilterOption(id=6, name="Driving/Racing"),
    FilterOption(id=9, name="Fighting"),
    FilterOption(id=12, name="Puzzle"),
    FilterOption(id=8, name="Sports"),
    FilterOption(id=10, name="Shooter"),
    FilterOption(id=32, name="Platformer"),
    FilterOption(id=11, name="Music/Rhythm"),
)

# Giant Bomb concept ids
CURATED_GIANTBOMB_CONCEPTS: tuple[FilterOption, ...] = (
    FilterOption(id=313, name="Open World"),
    FilterOption(id=3005, name="Survival Horror"),
    FilterOption(id=1197, name="Beat 'em Up"),
    FilterOption(id=1013, name="Roguelike"),
    FilterOption(id=4, name="Split-Screen Multiplayer"),
    FilterOption(id=130, name="Local Co-Op"),
    FilterOption(id=218, name="Metroidvania"),
    FilterOption(id=39, name="Stealth"),
)

# Giant Bomb platforms listed first; every other platform is grouped by year
PRIMARY_GIANTBOMB_PLATFORM_IDS: tuple[int, ...] = (
    94,  # PC
    176,  # PlayStation 5
    146,  # PlayStation 4
    179,  # Xbox Series X|S
    145,  # Xbox One
    157,  # Nintendo Switch
)
