import os
from dotenv import load_dotenv

load_dotenv()

APP_NAME = "Writing Tools API"
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")

# LLM Vars
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
GROQ_MODEL = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")

# Limits
DETECTION_CHAR_LIMIT = int(os.getenv("DETECTION_CHAR_LIMIT", 3000))
PARAPHRASE_WORD_LIMIT = int(os.getenv("PARAPHRASE_WORD_LIMIT", 125))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
