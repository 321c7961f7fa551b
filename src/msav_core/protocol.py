"""MSAV protocol constants.

Single source of truth for on-disk sizes, magic values and record layouts.
Keep this file stable. Codecs and detectors must remain synchronized.
"""

# Word cipher seed
CIPHER_SEED_KEY1 = 0x23101976
CIPHER_SEED_KEY2 = 0x10072002
U32_MASK = 0xFFFFFFFF

# Profile save: [Header(24) | Core(84) | Block720 | Block92 | Block156]
PROFILE_MAGIC = 0x50726F66  # "forP" little-endian
PROFILE_VERSION = 1
PROFILE_HEADER_LEN = 24
PROFILE_HEADER_VERSION_OFF = 8
PROFILE_CORE_LEN = 84
PROFILE_BLOCK720_LEN = 720
PROFILE_BLOCK92_LEN = 92
PROFILE_BLOCK156_LEN = 156
PROFILE_BLOCK_LENS = (PROFILE_CORE_LEN, PROFILE_BLOCK720_LEN, PROFILE_BLOCK92_LEN, PROFILE_BLOCK156_LEN)
PROFILE_FILE_LEN = PROFILE_HEADER_LEN + sum(PROFILE_BLOCK_LENS)  # 1076

# mr-profile: 34 x u32
MR_PROFILE_WORDS = 34
MR_PROFILE_LEN = MR_PROFILE_WORDS * 4  # 136

# mr-times: [Count(4) | Record(40) * n], Record = [Name(32) | A(4) | B(4)]
MR_TIMES_HEADER_LEN = 4
MR_TIMES_NAME_LEN = 32
MR_TIMES_REC_FMT = "<32sII"
MR_TIMES_REC_LEN = 40

# mr-seg0: [A(4) | B(4) | C(4) | Point(12) * n], Point = [x | y | z] f32
MR_SEG0_HEADER_FMT = "<III"
MR_SEG0_HEADER_LEN = 12
MR_SEG0_POINT_FMT = "<fff"
MR_SEG0_POINT_LEN = 12

# Actor payload classification
ACTOR_MARKER = 3
ACTOR_BASE_MIN_LEN = 13
ACTOR_SUBTYPE_OFF = 13
SUBTYPE_HUMAN = 6
SUBTYPE_CAR = 9
HUMAN_MIN_LEN = 42
CAR_MIN_LEN = 18

# Human payload
HUMAN_CORE_LEN = 382
HUMAN_CORE_END = ACTOR_SUBTYPE_OFF + HUMAN_CORE_LEN  # 395
HUMAN_HEALTH_OFF = 221
HUMAN_MAX_HEALTH_OFF = 225
HUMAN_PROPS_CUR_OFF = 229
HUMAN_PROPS_INIT_OFF = 293
HUMAN_PROPS_COUNT = 16
HUMAN_PROPS_LEN = HUMAN_PROPS_COUNT * 4  # 64
HUMAN_NAME_CHUNKS = 2
HUMAN_CHUNK_HEADER_LEN = 8
HUMAN_CHUNK_MAX_NAME = 1024
HUMAN_INVENTORY_LEN = 196

# Car payload
CAR_ENGINE_NORM_OFF = 137
CAR_ENGINE_CALC_OFF = 141
CAR_FLOW_OFF = 211
CAR_SPEED_LIMIT_OFF = 215
CAR_LAST_GEAR_OFF = 245
CAR_GEAR_OFF = 249
CAR_GEARBOX_FLAG_OFF = 273
CAR_DISABLE_ENGINE_OFF = 277
CAR_ENGINE_ON_OFF = 298
CAR_IS_ENGINE_ON_OFF = 303
CAR_FUEL_OFF = 304
CAR_ODOMETER_OFF = 345

# Program block: [Marker(1) | ...(16) | Regs(2) | Vars(4) | Frames(4) | Actors(4) | ...(8)]
PROGRAM_MARKER = 2
PROGRAM_HEADER_LEN = 39
PROGRAM_REG_COUNT_OFF = 17
PROGRAM_VAR_COUNT_OFF = 19
PROGRAM_FRAME_COUNT_OFF = 23
PROGRAM_ACTOR_COUNT_OFF = 27
PROGRAM_MAX_REGS = 4096
PROGRAM_MAX_VARS = 8192
PROGRAM_MAX_FRAMES = 2048
PROGRAM_MAX_ACTORS = 2048
PROGRAM_ACTOR_HEADER_LEN = 8
PROGRAM_MAX_ACTOR_NAME = 1024
PROGRAM_FRAME_HEADER_LEN = 2

# Garage catalog: 168-byte records
GARAGE_REC_LEN = 168
GARAGE_FIELD_LEN = 32
GARAGE_CODE_OFF = 0
GARAGE_MODEL_OFF = 32
GARAGE_SHADOW_OFF = 64
GARAGE_NAME_OFF = 96
GARAGE_RACE_MASK_OFF = 132
GARAGE_CHAMP_MASK_OFF = 136
GARAGE_FREERIDE_MASK_OFF = 160
GARAGE_MIN_ENTRIES = 20
GARAGE_MIN_RUN = 4
GARAGE_WINDOW = 4

# Catalog search paths, relative to the game directory
DEFAULT_CATALOG_PATHS = ("tables/carindex.def", "TABLES/CARINDEX.DEF", "carindex.def")
