"""Static lookup tables for world generation.

Nearby locations, NPCs and weather are keyed by lowercase world type.
Unknown world types use the fantasy tables.
"""

from __future__ import annotations

from rpg_engine.core.constants import DEFAULT_WORLD_TYPE
from rpg_engine.models.base import Location
from rpg_engine.models.world import Environment, Faction, KeyItem, NPCProfile, WorldData


# =============================================================================
# Per World Type Tables
# =============================================================================

LOCATION_SETS: dict[str, tuple[Location, ...]] = {
    "fantasy": (
        Location(id="village_square", name="Village Square", description="The bustling center of the nearby settlement, filled with merchants and townsfolk."),
        Location(id="ancient_ruins", name="Ancient Ruins", description="Crumbling stone structures covered in vines and moss, hinting at a civilization long gone."),
        Location(id="dark_forest", name="Dark Forest", description="A dense forest where sunlight barely penetrates the thick canopy of leaves overhead."),
    ),
    "sci-fi": (
        Location(id="space_port", name="Space Port", description="A busy docking area for interstellar vessels, filled with travelers from distant worlds."),
        Location(id="research_lab", name="Research Laboratory", description="A sterile facility where scientists conduct experiments with advanced technology."),
        Location(id="alien_market", name="Xenomarket", description="A crowded market where traders sell exotic goods from across the galaxy."),
    ),
    "post-apocalyptic": (
        Location(id="ruined_city", name="Ruined City", description="The hollow shell of a once-thriving metropolis, now home to scavengers and dangers."),
        Location(id="survivor_camp", name="Survivor Camp", description="A fortified encampment where the remaining humans have banded together for safety."),
        Location(id="toxic_wastes", name="Toxic Wastes", description="A hazardous area where chemicals have contaminated the landscape, creating mutated flora and fauna."),
    ),
    "steampunk": (
        Location(id="clockwork_district", name="Clockwork District", description="A section of the city filled with whirring gears and steam-powered machinery."),
        Location(id="airship_docks", name="Airship Docks", description="Massive platforms where airships dock, loading and unloading passengers and cargo."),
        Location(id="inventors_guild", name="Inventors' Guild", description="A prestigious building where brilliant minds develop new mechanical wonders."),
    ),
    "cyberpunk": (
        Location(id="neon_market", name="Neon Market", description="A chaotic marketplace illuminated by colorful holographic advertisements."),
        Location(id="corporate_sector", name="Corporate Sector", description="Towering skyscrapers where megacorporations control the fate of millions."),
        Location(id="underground_club", name="Underground Club", description="A hidden nightclub where hackers and rebels gather away from prying eyes."),
    ),
}

NPC_SETS: dict[str, tuple[NPCProfile, ...]] = {
    "fantasy": (
        NPCProfile(id="village_elder", name="Elder Thorne", description="A wise village elder with knowledge of the land.", relationship=50),
        NPCProfile(id="mysterious_stranger", name="The Hooded Figure", description="A traveler who speaks little but seems to know much about recent events.", relationship=30),
        NPCProfile(id="tavern_keeper", name="Innkeeper Mira", description="The cheerful proprietor of the local tavern, a hub of gossip and information.", relationship=60),
    ),
    "sci-fi": (
        NPCProfile(id="station_ai", name="ARIA", description="The artificial intelligence that manages the station systems.", relationship=50),
        NPCProfile(id="smuggler", name="Captain Rax", description="A ship captain who transports goods of questionable legality across systems.", relationship=40),
        NPCProfile(id="scientist", name="Dr. Elara Vex", description="A brilliant xenobiologist studying alien lifeforms.", relationship=55),
    ),
    "post-apocalyptic": (
        NPCProfile(id="wasteland_guide", name="Scrapper Jones", description="A seasoned survivor who knows how to navigate the dangerous wastes.", relationship=45),
        NPCProfile(id="trade_merchant", name="Barter", description="A resourceful merchant who deals in salvaged goods and vital supplies.", relationship=50),
        NPCProfile(id="doctor", name="Doc Myers", description="One of the few remaining medical professionals, treating injuries and radiation sickness.", relationship=60),
    ),
    "steampunk": (
        NPCProfile(id="inventor", name="Professor Cogsworth", description="An eccentric inventor always working on the next revolutionary device.", relationship=55),
        NPCProfile(id="airship_captain", name="Captain Victoria Wells", description="The stern but fair captain of an airship that travels between major cities.", relationship=50),
        NPCProfile(id="aristocrat", name="Lord Pemberton", description="A wealthy nobleman with connections throughout high society.", relationship=40),
    ),
    "cyberpunk": (
        NPCProfile(id="hacker", name="Glitch", description="A skilled netrunner who can breach almost any security system for the right price.", relationship=45),
        NPCProfile(id="fixer", name="Jax", description="A well-connected middleman who arranges jobs and deals in the shadows.", relationship=50),
        NPCProfile(id="street_doc", name="Dr. Circuit", description="An underground surgeon specializing in cybernetic implants and modifications.", relationship=55),
    ),
}

WEATHER_SETS: dict[str, tuple[str, ...]] = {
    "fantasy": ("clear", "cloudy", "rainy", "foggy", "stormy", "windy"),
    "sci-fi": ("clear", "meteor shower", "solar flare", "artificial weather", "atmosphere fluctuation"),
    "post-apocalyptic": ("toxic haze", "acid rain", "radiation storm", "dust storm", "nuclear winter"),
    "steampunk": ("smoggy", "foggy", "rainy", "clear with airship traffic", "coal dust clouds"),
    "cyberpunk": ("acid rain", "smog", "neon-lit darkness", "pollution haze", "artificial weather"),
}

TIME_OPTIONS: tuple[str, ...] = (
    "dawn", "morning", "midday", "afternoon", "dusk", "evening", "night", "midnight",
)

SEASONS: tuple[str, ...] = ("spring", "summer", "autumn", "winter")


def table_key(world_type: str) -> str:
    """Map a declared world type onto a table key, falling back to fantasy."""
    key = world_type.strip().lower()
    return key if key in LOCATION_SETS else DEFAULT_WORLD_TYPE


# =============================================================================
# Defaults For Incomplete Worlds
# =============================================================================

DEFAULT_WORLD_NAME = "Unnamed Realm"
DEFAULT_WORLD_DESCRIPTION = "A mysterious world awaiting exploration."
DEFAULT_STARTING_NAME = "Starting Point"
DEFAULT_STARTING_DESCRIPTION = "The beginning of your adventure."

DEFAULT_PLOT_HOOKS: tuple[str, ...] = (
    "Strange rumors of disappearances in the area",
    "A mysterious artifact that locals speak of in hushed tones",
    "Political tension between rival factions",
)

DEFAULT_FACTIONS: tuple[Faction, ...] = (
    Faction(name="The Guardians", description="Protectors of the old ways and keepers of ancient knowledge."),
    Faction(name="The Seekers", description="A group dedicated to uncovering lost treasures and forgotten magic."),
)

DEFAULT_KEY_ITEMS: tuple[KeyItem, ...] = (
    KeyItem(name="Ancient Map", description="A weathered map showing locations of mysterious significance."),
    KeyItem(name="Strange Amulet", description="An amulet that seems to pulse with unknown energy."),
)


# =============================================================================
# Fallback World
# =============================================================================

FALLBACK_WORLD = WorldData(
    world_type="fantasy",
    name="Eldoria",
    description=(
        "A realm of magic and mystery, where ancient forests hide forgotten secrets "
        "and mythical creatures roam the wilderness."
    ),
    starting_location=Location(
        id="forest_edge",
        name="Forest Edge",
        description=(
            "A dense, misty forest with ancient trees. A narrow path winds its way between "
            "massive trunks, disappearing into the shadows. The air is thick with the scent "
            "of moss and rain."
        ),
    ),
    intro_text=(
        "You find yourself standing at the edge of a dense, misty forest. A narrow path winds "
        "its way between ancient trees, disappearing into the shadows. The air is thick with "
        "the scent of moss and rain. In the distance, you hear the faint sound of flowing water "
        "and what might be voices. Your journey in Eldoria begins here, at the threshold of "
        "the unknown."
    ),
    potential_plot_hooks=(
        "Strange symbols carved into trees",
        "Rumors of a hidden temple",
        "Villagers disappearing in the night",
    ),
    factions=(
        Faction(name="The Guardians of the Grove", description="Protectors of the forest who follow ancient druidic traditions."),
        Faction(name="The Imperial Order", description="Representatives of the distant empire, seeking to expand their influence."),
    ),
    key_items=(
        KeyItem(name="Ancient Amulet", description="A mysterious amulet that glows faintly in the presence of magic."),
        KeyItem(name="Forest Map", description="A weathered map showing hidden paths through the dense woods."),
    ),
    nearby_locations=(
        Location(id="village_clearing", name="Village Clearing", description="A small settlement at the edge of the forest where traders and travelers rest."),
        Location(id="ancient_ruins", name="Ancient Ruins", description="Crumbling stone structures covered in vines and moss, hinting at a civilization long gone."),
        Location(id="mystic_grove", name="Mystic Grove", description="A peaceful clearing where magical flora grows and strange lights float in the air."),
    ),
    npcs=(
        NPCProfile(id="village_elder", name="Elder Thorne", description="A wise village elder with knowledge of the forest and its secrets.", relationship=50),
        NPCProfile(id="wandering_merchant", name="Trader Lyra", description="A traveling merchant who deals in rare and unusual goods.", relationship=50),
        NPCProfile(id="mysterious_stranger", name="The Hooded Figure", description="A silent observer who seems to appear and disappear at will.", relationship=30),
    ),
    environment=Environment(time="dusk", weather="misty", season="autumn"),
)
"""The one canonical world used whenever a generated world cannot be parsed."""


__all__ = [
    "LOCATION_SETS",
    "NPC_SETS",
    "WEATHER_SETS",
    "TIME_OPTIONS",
    "SEASONS",
    "table_key",
    "DEFAULT_WORLD_NAME",
    "DEFAULT_WORLD_DESCRIPTION",
    "DEFAULT_STARTING_NAME",
    "DEFAULT_STARTING_DESCRIPTION",
    "DEFAULT_PLOT_HOOKS",
    "DEFAULT_FACTIONS",
    "DEFAULT_KEY_ITEMS",
    "FALLBACK_WORLD",
]
