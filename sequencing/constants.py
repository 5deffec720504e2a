"""Constants for the trial sequencing package

The variables here are considered fixed.
Parameters in the `config.py` file are considered user-configurable.
"""

import logging
from pathlib import Path

# GENERAL SETTINGS
PACKAGE_NAME = "trial-sequencing"
CONFIG_ENV_VAR = "SEQUENCING_CONFIG"
DEFAULT_CONFIG_FILE = "sequencing_config.yaml"
DEFAULT_QUESTION_BANK = Path(__file__).parent / "data" / "questions.yaml"

# state data is sampled every 0.06 s; the tracking scene uses the same rate for player data
DATA_RECORD_FREQUENCY = 0.06

# LOGGING
CONSOLE_LOG_LEVEL = logging.WARNING
FILE_LOG_LEVEL = logging.INFO
WARNINGS_CAPTURE_LEVEL = logging.WARNING

# SEQUENCE LAYOUT
## Persistent, InformationScreen, BeforeStartingScreen, ConsentScreen, StartScreen, InstructionsScreen and Exit
SETUP_AND_CLOSE_SLOTS = 7
SETUP_SLOTS = SETUP_AND_CLOSE_SLOTS - 1
## the get ready screen after the practice trials
GET_READY_SLOTS = 1
## rest frequencies are given as "rest after this many trials" + 1
REST_BREAK_OFFSET = 1

## Scene / maze tags
PERSISTENT = "Persistent"
INFORMATION_SCREEN = "InformationScreen"
BEFORE_STARTING_SCREEN = "BeforeStartingScreen"
CONSENT_SCREEN = "ConsentScreen"
START_SCREEN = "StartScreen"
INSTRUCTIONS_SCREEN = "InstructionsScreen"
PRACTICE = "Practice"
GET_READY = "GetReady"
MAIN_TRIAL = "MainTrial"
REST_BREAK = "RestBreak"
EXIT = "Exit"
UNSET = ""

SETUP_MAZES = (
    PERSISTENT,
    INFORMATION_SCREEN,
    BEFORE_STARTING_SCREEN,
    CONSENT_SCREEN,
    START_SCREEN,
    INSTRUCTIONS_SCREEN,
)

ADMINISTRATIVE_MAZES = SETUP_MAZES + (GET_READY, EXIT)

# TIMING (seconds)
## jitters are added on top of these values, so they are minimums
MAX_RESPONSE_TIME = 90.0
PRE_DISPLAY_CUE_TIME = 1.0
DISPLAY_CUE_TIME = 0.0
GO_CUE_DELAY = 0.1  # minimum reading time before a response is accepted
FINAL_GOAL_HIT_PAUSE_TIME = 0.2
DISPLAY_MESSAGE_TIME = 1.5
ERROR_DWELL_TIME = 1.5  # should be at least as long as DISPLAY_MESSAGE_TIME
PAUSE_PRIOR_FEEDBACK_TIME = 0.0
FEEDBACK_FLASH_DURATION = 0.2
GET_READY_DURATION = 5.0
JITTER_FRACTION = 0.5
