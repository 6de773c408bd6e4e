"""Configuration settings for the Clinic Health Tracker API."""

from dotenv import load_dotenv

load_dotenv()

# --- Google Sheets Configuration ---
# Google API Scopes needed
SCOPES = [
    'https://www.googleapis.com/auth/spreadsheets',
]

# Worksheet names inside the spreadsheet
MEDICAL_SHEET_NAME = 'Medical'
BLOOD_PRESSURE_SHEET_NAME = 'Blood Pressure'
USERS_SHEET_NAME = 'Users'

# --- Record Layout --- #
# 0-based index of the column holding the record's display name (Column D)
KEY_COL_IDX = 3

# Writes always read through this 1-based column ("AZ"), whatever the sheet width
WRITE_LAST_COLUMN = 52

# Values written to the sheet use USER_ENTERED so dates and numbers get parsed
VALUE_INPUT_OPTION = 'USER_ENTERED'

# Separator between entries of a history cell
HISTORY_DELIMITER = ' | '

# 0-based column indices for every tracked attribute of the Medical sheet
FIELD_COLUMN_MAP = {
    'weight': 12,            # Column M
    'height': 13,            # Column N
    'bloodPressure': 15,     # Column P
    'pulseRate': 16,         # Column Q
    'oxygen': 17,            # Column R
    'temperature': 18,       # Column S
    'bloodSugar': 19,        # Column T
    'gp': 20,                # Column U
    'allergy': 21,           # Column V
    'alert': 22,             # Column W
    'condition': 23,         # Column X
    'remarks': 24,           # Column Y
    'medication': 25,        # Column Z
    'reminderDateLocal': 26, # Column AA
    'reminderDateUtc': 27,   # Column AB
    'messageText': 28,       # Column AC
}

# Field update endpoints: URL slug -> (request field, column key, label for messages)
# The request body is {"name": ..., "<field>Data": ...}
FIELD_UPDATE_ROUTES = {
    'weight': ('weight', 'weight', 'Weight'),
    'height': ('height', 'height', 'Height'),
    'blood-pressure': ('bloodPressure', 'bloodPressure', 'Blood Pressure'),
    'pulse-rate': ('pulseRate', 'pulseRate', 'Pulse Rate'),
    'oxygen': ('oxygen', 'oxygen', 'Oxygen'),
    'temperature': ('temperature', 'temperature', 'Temperature'),
    'blood-sugar': ('bloodSugar', 'bloodSugar', 'Blood Sugar'),
    'gp': ('gp', 'gp', 'GP'),
    'allergy': ('allergy', 'allergy', 'Allergy'),
    'alert': ('alert', 'alert', 'Alert'),
    'condition': ('condition', 'condition', 'Condition'),
    'remarks': ('remarks', 'remarks', 'Remarks'),
    'medication': ('medication', 'medication', 'Medication'),
    'message-text': ('messageText', 'messageText', 'Message Text'),
    'time-to-remind': ('timeToRemind', 'reminderDateUtc', 'Time to Remind'),
}

# Demographic columns A-L in sheet order. None marks a position that is always
# written blank (D holds the sheet's own full-name value, G its computed age).
DEMOGRAPHIC_LAYOUT = [
    'surname',      # A
    'firstname',    # B
    'middle',       # C
    None,           # D
    'localeGroup',  # E
    'birthday',     # F
    None,           # G
    'gender',       # H
    'status',       # I
    'visaStatus',   # J
    'address',      # K
    'contactNo',    # L
]

# Columns searched by the substring search (Surname, Firstname, Middle, Full Name)
SEARCH_COLUMN_COUNT = 4

# Columns compared by the existence check
SURNAME_COL_IDX = 0
FIRSTNAME_COL_IDX = 1
MIDDLE_COL_IDX = 2
BIRTHDAY_COL_IDX = 5

# --- Users Sheet Layout --- #
USERS_USERNAME_COL_IDX = 0
USERS_PASSWORD_HASH_COL_IDX = 1
USERS_CHURCH_ID_COL_IDX = 2

# --- Twilio Configuration ---
TWILIO_API_BASE_URL = 'https://api.twilio.com/2010-04-01'

# --- Server ---
DEFAULT_PORT = 8080
