"""Constants for the nepdict search engine."""

# Exact tier scores
WORD_EXACT_SCORE = 1000
ROMANIZATION_EXACT_SCORE = 800
DEFINITION_EXACT_SCORE = 900  # whole single-word definition
DEFINITION_WORD_SCORE = 600  # full word inside a definition

# Partial tier scores
WORD_PARTIAL_SCORE = 100
ROMANIZATION_PARTIAL_SCORE = 80
DEFINITION_PARTIAL_WEIGHT = 60  # scaled by similarity
CATEGORY_MATCH_SCORE = 30
EXAMPLE_MATCH_SCORE = 40

# Fuzzy tier weights (scaled by similarity)
WORD_FUZZY_WEIGHT = 50
ROMANIZATION_FUZZY_WEIGHT = 40
DEFINITION_FUZZY_WEIGHT = 30

FUZZY_THRESHOLD = 0.7
MIN_DEFINITION_TOKEN_LENGTH = 3

# Result caps
MAX_SEARCH_RESULTS = 15
MAX_ADVANCED_RESULTS = 50
MAX_SIMILAR_RESULTS = 20
DEFAULT_SUGGESTION_LIMIT = 10
MIN_SUGGESTION_LENGTH = 2
DEFAULT_RANDOM_SAMPLE_SIZE = 10

# Result cache
DEFAULT_CACHE_MAX_ENTRIES = 1000

HIGHLIGHT_OPEN = "<mark>"
HIGHLIGHT_CLOSE = "</mark>"
DEFINITION_HIGHLIGHT_SEPARATOR = " | "

DEFAULT_DATA_DIR = "data"

# Enumeration order of the bundled vocabulary files
DEFAULT_SOURCE_FILES = [
    "adverbs.json",
    "animals.json",
    "arts.json",
    "auxiliaries.json",
    "birds.json",
    "body.json",
    "clothing.json",
    "colors.json",
    "conjunctions.json",
    "determiners.json",
    "directions.json",
    "education.json",
    "family.json",
    "festival.json",
    "finance.json",
    "food.json",
    "fruits.json",
    "general.json",
    "geography.json",
    "governance.json",
    "health.json",
    "household.json",
    "interjections.json",
    "music.json",
    "nature.json",
    "numbers.json",
    "particles.json",
    "places.json",
    "postpositions.json",
    "professions.json",
    "pronouns.json",
    "religion.json",
    "sports.json",
    "technology.json",
    "time.json",
    "tools.json",
    "transport.json",
    "verbs.json",
]
