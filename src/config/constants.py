from __future__ import annotations

RND = 42

# --- Occupation fields ---
OTHER_FIELD = "other"  # sentinel label when no keyword matches
PROFESSION_SEPARATORS = (",", ";")

# --- Raw candidate list (volby.cz psrk layout) ---
RAW_COLUMN_MAP = {
    "VOLKRAJ": "region_code",
    "KSTRANA": "party_id",
    "PORCISLO": "list_position",
    "JMENO": "first_name",
    "PRIJMENI": "last_name",
    "TITULPRED": "title_before",
    "TITULZA": "title_after",
    "VEK": "age",
    "POVOLANI": "occupation",
    "BYDLISTEN": "residence",
    "PSTRANA": "member_party",
    "NSTRANA": "nominating_party",
    "POCHLASU": "votes",
    "POCPROC": "pref_vote_pct",
    "MANDAT": "mandate",
}

PARTY_COLUMNS = ["party_id", "party_abbrev", "party_name", "ideology"]

# Region (kraj) codes used by the Chamber of Deputies candidate lists
REGIONS = {
    1: "Hlavní město Praha",
    2: "Středočeský kraj",
    3: "Jihočeský kraj",
    4: "Plzeňský kraj",
    5: "Karlovarský kraj",
    6: "Ústecký kraj",
    7: "Liberecký kraj",
    8: "Královéhradecký kraj",
    9: "Pardubický kraj",
    10: "Kraj Vysočina",
    11: "Jihomoravský kraj",
    12: "Olomoucký kraj",
    13: "Zlínský kraj",
    14: "Moravskoslezský kraj",
}

# Mandate markers -> 0/1 (compared upper-cased and stripped)
MANDATE_TRUE = {"A", "ANO", "1", "TRUE", "*", "Y", "YES"}
MANDATE_FALSE = {"N", "NE", "0", "FALSE", "", "NO"}

# --- Academic titles ---
DEGREE_ORDER = ["none", "bachelor", "master", "doctorate"]

DEGREE_TITLES = {
    "bc": "bachelor",
    "bca": "bachelor",
    "dis": "bachelor",
    "mgr": "master",
    "mga": "master",
    "ing": "master",
    "mudr": "master",
    "mddr": "master",
    "mvdr": "master",
    "judr": "master",
    "phdr": "master",
    "rndr": "master",
    "pharmdr": "master",
    "paeddr": "master",
    "thdr": "master",
    "thlic": "master",
    "mba": "master",
    "ll.m": "master",
    "ph.d": "doctorate",
    "phd": "doctorate",
    "th.d": "doctorate",
    "csc": "doctorate",
    "drsc": "doctorate",
    "doc": "doctorate",
    "prof": "doctorate",
}

# --- Gender inference ---
FEMALE_SURNAME_SUFFIXES = ("á",)

# --- Model columns ---
TARGET_COL = "mandate"
ID_COLS = ["region_code", "party_id", "list_position"]

AGE_BINS = [0, 29, 39, 49, 59, 200]
AGE_LABELS = ["18-29", "30-39", "40-49", "50-59", "60+"]

# Keep features in one place to avoid duplication across scripts.
NUMERIC_FEATURES = [
    "age",
    "list_position_log",
    "is_list_leader",
    "is_party_member",
    "has_degree",
]

CATEGORICAL_FEATURES = [
    "gender",
    "degree",
    "field",
    "ideology",
    "region",
]
