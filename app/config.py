# app/config.py
RECORDS_PATH = "records.json"
CORRUPT_SUFFIX = ".corrupt"
TMP_SUFFIX = ".tmp"

# Session timing
TIME_LIMIT_SECONDS = 180
TICK_SECONDS = 1.0  # countdown re-render interval

LOG_FILE = "typemaster.log"

# Answers accepted at the "again?" prompt to leave the loop
QUIT_WORDS = ("q", "quit", "exit")

# Index into app.themes.THEMES: 0 Classic (colors), 1 Mono (for terminals without color)
THEME_INDEX = 0
