"""
Hand-maintained anime and trailer data served when live sources fail.

STATIC_CATALOG holds frozen summaries in display order, ranked 1..N by
position. STATIC_TRAILERS_BY_ID is consulted before
STATIC_TRAILER_KEYWORDS; among keywords the longest match wins and equal
lengths resolve to the earlier declaration.
"""
from types import MappingProxyType

from anime_api.schemas import AnimeSummary, assign_ranks

_CATALOG_ROWS = (
    {
        "mal_id": 52991,
        "title": "Sousou no Frieren",
        "title_english": "Frieren: Beyond Journey's End",
        "title_japanese": "葬送のフリーレン",
        "images": {
            "small": "https://cdn.myanimelist.net/images/anime/1015/138006t.jpg",
            "medium": "https://cdn.myanimelist.net/images/anime/1015/138006.jpg",
            "large": "https://cdn.myanimelist.net/images/anime/1015/138006l.jpg",
        },
        "score": 9.3,
        "episodes": 28,
        "year": 2023,
        "status": "currently_airing",
        "rating": "PG-13 - Teens 13 or older",
        "popularity": 150,
        "genres": ["Adventure", "Drama", "Fantasy"],
        "demographics": ["Shounen"],
        "studios": ["Madhouse"],
        "trailer_youtube_id": "qgQHIkQFHbA",
        "synopsis": "After the party of heroes defeats the Demon King, the elf mage Frieren "
                    "sets out to understand the humans she travelled with.",
        "type": "TV",
        "source": "Manga",
        "duration": "24 min per ep",
        "broadcast": {"day": "Fridays", "time": "23:00", "timezone": "Asia/Tokyo", "text": "Fridays at 23:00 (JST)"},
    },
    {
        "mal_id": 52299,
        "title": "Ore dake Level Up na Ken",
        "title_english": "Solo Leveling",
        "title_japanese": "俺だけレベルアップな件",
        "images": {
            "small": "https://cdn.myanimelist.net/images/anime/1801/142390t.jpg",
            "medium": "https://cdn.myanimelist.net/images/anime/1801/142390.jpg",
            "large": "https://cdn.myanimelist.net/images/anime/1801/142390l.jpg",
        },
        "score": 8.3,
        "episodes": 12,
        "year": 2024,
        "status": "currently_airing",
        "rating": "R - 17+ (violence & profanity)",
        "popularity": 210,
        "genres": ["Action", "Adventure", "Fantasy"],
        "studios": ["A-1 Pictures"],
        "trailer_youtube_id": "Xc9hb1Ykyrc",
        "synopsis": "The weakest hunter in a world of monster-filled gates gains the power "
                    "to level up without limit.",
        "type": "TV",
        "source": "Web manga",
        "duration": "23 min per ep",
        "broadcast": {"day": "Saturdays", "time": "23:30", "timezone": "Asia/Tokyo", "text": "Saturdays at 23:30 (JST)"},
    },
    {
        "mal_id": 21,
        "title": "One Piece",
        "title_english": "One Piece",
        "title_japanese": "ONE PIECE",
        "images": {
            "small": "https://cdn.myanimelist.net/images/anime/1244/138851t.jpg",
            "medium": "https://cdn.myanimelist.net/images/anime/1244/138851.jpg",
            "large": "https://cdn.myanimelist.net/images/anime/1244/138851l.jpg",
        },
        "score": 8.7,
        "episodes": None,
        "year": 1999,
        "status": "currently_airing",
        "rating": "PG-13 - Teens 13 or older",
        "popularity": 19,
        "genres": ["Action", "Adventure", "Fantasy"],
        "demographics": ["Shounen"],
        "studios": ["Toei Animation"],
        "trailer_youtube_id": "S8_YwFLCh4U",
        "synopsis": "Monkey D. Luffy and the Straw Hat Pirates sail the Grand Line in search "
                    "of the legendary treasure One Piece.",
        "type": "TV",
        "source": "Manga",
        "duration": "24 min per ep",
        "broadcast": {"day": "Sundays", "time": "23:15", "timezone": "Asia/Tokyo", "text": "Sundays at 23:15 (JST)"},
    },
    {
        "mal_id": 50265,
        "title": "Spy x Family",
        "title_english": "Spy x Family",
        "title_japanese": "SPY×FAMILY",
        "images": {
            "small": "https://cdn.myanimelist.net/images/anime/1441/122795t.jpg",
            "medium": "https://cdn.myanimelist.net/images/anime/1441/122795.jpg",
            "large": "https://cdn.myanimelist.net/images/anime/1441/122795l.jpg",
        },
        "score": 8.5,
        "episodes": 12,
        "year": 2022,
        "status": "currently_airing",
        "rating": "PG-13 - Teens 13 or older",
        "popularity": 68,
        "genres": ["Action", "Comedy"],
        "demographics": ["Shounen"],
        "studios": ["Wit Studio", "CloverWorks"],
        "trailer_youtube_id": "ofXigq9aIpo",
        "synopsis": "A spy, an assassin and a telepath pose as a family, each keeping their "
                    "true identity from the others.",
        "type": "TV",
        "source": "Manga",
        "duration": "24 min per ep",
    },
    {
        "mal_id": 40748,
        "title": "Jujutsu Kaisen",
        "title_english": "Jujutsu Kaisen",
        "title_japanese": "呪術廻戦",
        "images": {
            "small": "https://cdn.myanimelist.net/images/anime/1171/109222t.jpg",
            "medium": "https://cdn.myanimelist.net/images/anime/1171/109222.jpg",
            "large": "https://cdn.myanimelist.net/images/anime/1171/109222l.jpg",
        },
        "score": 8.6,
        "episodes": 24,
        "year": 2020,
        "status": "currently_airing",
        "rating": "R - 17+ (violence & profanity)",
        "popularity": 22,
        "genres": ["Action", "Award Winning", "Supernatural"],
        "themes": ["School"],
        "demographics": ["Shounen"],
        "studios": ["MAPPA"],
        "trailer_youtube_id": "pkKu9hLT-t8",
        "synopsis": "Yuuji Itadori swallows a cursed finger and joins a school of sorcerers "
                    "fighting curses.",
        "type": "TV",
        "source": "Manga",
        "duration": "23 min per ep",
    },
)

STATIC_CATALOG: tuple[AnimeSummary, ...] = tuple(
    assign_ranks([AnimeSummary(**row) for row in _CATALOG_ROWS])
)

STATIC_TRAILERS_BY_ID = MappingProxyType({
    21: "S8_YwFLCh4U",
    16498: "MGRm4IzK1SQ",
    38000: "VQGCKyvzIM4",
    40748: "pkKu9hLT-t8",
    50265: "ofXigq9aIpo",
    51009: "O6qVieflwqs",
    52299: "Xc9hb1Ykyrc",
    52991: "qgQHIkQFHbA",
})

STATIC_TRAILER_KEYWORDS = (
    ("one piece", "S8_YwFLCh4U"),
    ("shingeki no kyojin", "MGRm4IzK1SQ"),
    ("attack on titan", "MGRm4IzK1SQ"),
    ("kimetsu no yaiba", "VQGCKyvzIM4"),
    ("demon slayer", "VQGCKyvzIM4"),
    ("jujutsu kaisen", "pkKu9hLT-t8"),
    ("jujutsu kaisen 2nd season", "O6qVieflwqs"),
    ("spy x family", "ofXigq9aIpo"),
    ("solo leveling", "Xc9hb1Ykyrc"),
    ("frieren", "qgQHIkQFHbA"),
)
