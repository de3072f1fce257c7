"""Bundled static type data: ``{class_key: {id: display name}}``."""

STATIC_TYPES = {
    "domainType": {
        "land": "Land",
        "water": "Water",
    },
    "elevationType": {
        "flat": "Flat",
        "hill": "Hill",
        "mountain": "Mountain",
        "snowMountain": "Snow Mountain",
    },
    "terrainType": {
        "ocean": "Ocean",
        "sea": "Sea",
        "coast": "Coast",
        "lake": "Lake",
        "majorRiver": "Major River",
        "snow": "Snow",
        "tundra": "Tundra",
        "grass": "Grassland",
        "plains": "Plains",
        "desert": "Desert",
    },
    "climateType": {
        "frozen": "Frozen",
        "cold": "Cold",
        "temperate": "Temperate",
        "warm": "Warm",
        "hot": "Hot",
        "equatorial": "Equatorial",
    },
    "oceanType": {
        "arctic": "Arctic Ocean",
        "antarctic": "Antarctic Ocean",
        "pacific": "Pacific Ocean",
        "atlantic": "Atlantic Ocean",
        "indian": "Indian Ocean",
        "mediterranean": "Mediterranean Sea",
        "caribbean": "Caribbean Sea",
    },
    "continentType": {
        "europe": "Europe",
        "asia": "Asia",
        "africa": "Africa",
        "america": "America",
        "oceania": "Oceania",
        "taiga": "Taiga",
        "arabia": "Arabia",
        "india": "India",
        "sunda": "Sunda",
        "patagonia": "Patagonia",
        "beringia": "Beringia",
        "zealandia": "Zealandia",
    },
    "featureType": {
        "ice": "Ice",
        "forest": "Forest",
        "pineForest": "Pine Forest",
        "jungle": "Jungle",
        "shrubs": "Shrubs",
        "swamp": "Swamp",
        "oasis": "Oasis",
        "floodPlain": "Flood Plain",
        "kelp": "Kelp",
        "lagoon": "Lagoon",
        "atoll": "Atoll",
        "tradeWind": "Trade Wind",
    },
}
