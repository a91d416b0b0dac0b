"""Elasto Mania on-disk constants.

Single source of truth for magic values, field widths and record layouts.
Level and replay codecs must stay synchronized with this file.
"""

# Level file magics
MAGIC_LEVEL_ELMA = b"POT14"
MAGIC_LEVEL_ACROSS = b"POT06"
MAGIC_LEN = 5

# End markers (little-endian i32)
EOD = 0x0067103A  # end of level data
EOF = 0x00845D52  # end of level file
EOR = 0x00492F75  # end of replay block

# Replay header: [FrameCount(4) | 0x83(4) | Multi(4) | FlagTag(4) | Link(4) | Level(12) | Reserved(4)]
REPLAY_MAGIC = 0x83
REPLAY_HEADER_FMT = "<iiiiI12si"
REPLAY_HEADER_LEN = 36

# Counts are stored as f64 with this offset added
COUNT_OFFSET = 0.4643643

# Field widths (null-padded ASCII)
LEVEL_NAME_LEN = 51
LGR_NAME_LEN = 16
GROUND_NAME_LEN = 10
SKY_NAME_LEN = 10
PICTURE_NAME_LEN = 10
REPLAY_LEVEL_LEN = 12
TOP10_NAME_LEN = 15

# Top-10 block: two tables of [Count(4) | Times(10*4) | Names1(10*15) | Names2(10*15)]
TOP10_ENTRIES = 10
TOP10_TABLE_LEN = 4 + TOP10_ENTRIES * 4 + 2 * TOP10_ENTRIES * TOP10_NAME_LEN  # 344
TOP10_BLOCK_LEN = 2 * TOP10_TABLE_LEN  # 688

# Level record layouts
LEVEL_HEADER_FMT = "<5sHI4d"
POLYGON_HEADER_FMT = "<ii"
VERTEX_FMT = "<dd"
OBJECT_FMT = "<ddiii"
PICTURE_FMT = "<10s10s10sddii"

# Frame columns, in on-disk order. 27 bytes per frame in total.
FRAME_COLUMNS = (
    ("bike_x", "f"),
    ("bike_y", "f"),
    ("left_wheel_x", "h"),
    ("left_wheel_y", "h"),
    ("right_wheel_x", "h"),
    ("right_wheel_y", "h"),
    ("head_x", "h"),
    ("head_y", "h"),
    ("rotation", "h"),
    ("left_wheel_rotation", "B"),
    ("right_wheel_rotation", "B"),
    ("data", "B"),
    ("volume", "h"),
)
FRAME_LEN = 27

# Event record: [Time(8) | Info(2) | Code(1) | Pad(1) | Unknown(4)]
EVENT_FMT = "<dhBBf"
EVENT_WRITE_FMT = "<dII"
EVENT_LEN = 16

# Timing
FRAME_PERIOD_MS = 33.333
EVENT_TO_MS = 2289.37728938

# Integrity sums
INTEGRITY_MULTIPLIER = 3247.764325643
INTEGRITY_SHAPE_BASE = 11877
INTEGRITY_SHAPE_SPAN = 5871
INTEGRITY_OBJECT_BASE = 12112
INTEGRITY_OBJECT_SPAN = 6102

# Top-10 cipher state
CRYPT_EBP8 = 0x15
CRYPT_EBP10 = 0x2637
CRYPT_MOD = 0xD3D
CRYPT_MUL = 0x1F

# Physical sizes
HEAD_DIAMETER = 0.476
HEAD_RADIUS = 0.238
OBJECT_DIAMETER = 0.8
OBJECT_RADIUS = 0.4
