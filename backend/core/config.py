"""
Configuration management for the StudyPath backend.
Loads configuration from environment variables and .env file.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
# Look for .env file in the project root or the backend directory
BACKEND_DIR = Path(__file__).parent.parent
PROJECT_ROOT = BACKEND_DIR.parent
ENV_FILE = PROJECT_ROOT / ".env"

if ENV_FILE.exists():
    load_dotenv(ENV_FILE)
else:
    backend_env = BACKEND_DIR / ".env"
    if backend_env.exists():
        load_dotenv(backend_env)

# Base paths
BASE_DIR = PROJECT_ROOT
DATA_DIR = Path(os.getenv("STUDYPATH_DATA_DIR", str(BASE_DIR / "data")))
DB_PATH = DATA_DIR / "studypath.db"
PROMPTS_DIR = BACKEND_DIR / "prompts"

DATA_DIR.mkdir(parents=True, exist_ok=True)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Ollama configuration
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
OLLAMA_GENERATION_MODEL = os.getenv("OLLAMA_GENERATION_MODEL", "mixtral:latest")
OLLAMA_EMBED_MODEL = os.getenv("OLLAMA_EMBED_MODEL", "nomic-embed-text:latest")
OLLAMA_TIMEOUT_SEC = float(os.getenv("OLLAMA_TIMEOUT_SEC", "60"))

# LLM settings (can be overridden via env vars)
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.3"))
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "2048"))
CURRICULUM_TEMPERATURE = float(os.getenv("CURRICULUM_TEMPERATURE", "0.4"))
CURRICULUM_MAX_TOKENS = int(os.getenv("CURRICULUM_MAX_TOKENS", "4096"))
CURRICULUM_DOCUMENT_CHAR_LIMIT = int(os.getenv("CURRICULUM_DOCUMENT_CHAR_LIMIT", "15000"))

# API configuration
API_V1_PREFIX = "/api/v1"
# CORS origins can be comma-separated list in env var
CORS_ORIGINS_STR = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:3001")
CORS_ORIGINS = [origin.strip() for origin in CORS_ORIGINS_STR.split(",")]

# Upload guards (applied by the caller, not the extractors)
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(20 * 1024 * 1024)))  # 20 MiB
MIN_EXTRACTED_CHARS = int(os.getenv("MIN_EXTRACTED_CHARS", "50"))

# Ranking weights for learning resources
RANKING_VIEWS_WEIGHT = float(os.getenv("RANKING_VIEWS_WEIGHT", "0.15"))
RANKING_LIKES_WEIGHT = float(os.getenv("RANKING_LIKES_WEIGHT", "0.20"))
RANKING_DURATION_WEIGHT = float(os.getenv("RANKING_DURATION_WEIGHT", "0.15"))
RANKING_RELEVANCE_WEIGHT = float(os.getenv("RANKING_RELEVANCE_WEIGHT", "0.35"))
RANKING_CREDIBILITY_WEIGHT = float(os.getenv("RANKING_CREDIBILITY_WEIGHT", "0.15"))
DEFAULT_RELEVANCE_SCORE = int(os.getenv("DEFAULT_RELEVANCE_SCORE", "70"))

# Section matching
MATCH_CANDIDATE_COUNT = int(os.getenv("MATCH_CANDIDATE_COUNT", "5"))
MAX_VIDEOS_PER_SECTION = int(os.getenv("MAX_VIDEOS_PER_SECTION", "5"))
TRANSCRIPT_CHAR_LIMIT = int(os.getenv("TRANSCRIPT_CHAR_LIMIT", "8000"))
EXPLANATION_EXCERPT_CHARS = int(os.getenv("EXPLANATION_EXCERPT_CHARS", "2000"))
MAX_TRANSCRIPT_HIGHLIGHTS = int(os.getenv("MAX_TRANSCRIPT_HIGHLIGHTS", "3"))
MATCH_FALLBACK_CONFIDENCE = int(os.getenv("MATCH_FALLBACK_CONFIDENCE", "50"))
EXPLANATION_MODEL = os.getenv("EXPLANATION_MODEL", OLLAMA_GENERATION_MODEL)

# Concurrency and timeouts
MAX_CONCURRENT_SECTIONS = int(os.getenv("MAX_CONCURRENT_SECTIONS", "4"))
MAX_CONCURRENT_CANDIDATES = int(os.getenv("MAX_CONCURRENT_CANDIDATES", "5"))
CANDIDATE_TIMEOUT_SEC = float(os.getenv("CANDIDATE_TIMEOUT_SEC", "90"))
SEARCH_TIMEOUT_SEC = float(os.getenv("SEARCH_TIMEOUT_SEC", "20"))

# Resource search (topic path)
DEFAULT_NUM_YOUTUBE = int(os.getenv("DEFAULT_NUM_YOUTUBE", "6"))
DEFAULT_NUM_ARTICLES = int(os.getenv("DEFAULT_NUM_ARTICLES", "3"))
TRANSCRIPT_LANGUAGES = [
    lang.strip() for lang in os.getenv("TRANSCRIPT_LANGUAGES", "en").split(",") if lang.strip()
]

# Transcript cache
ENABLE_TRANSCRIPT_CACHE = os.getenv("ENABLE_TRANSCRIPT_CACHE", "true").lower() == "true"
CACHE_TTL_HOURS = int(os.getenv("CACHE_TTL_HOURS", "168"))


class ResourceSourceConfig:
    """Domain hints for classifying and filtering web resources."""

    # Domains whose posts are classified as blogs rather than articles
    BLOG_DOMAINS = [
        "medium.com",
        "dev.to",
        "hashnode.dev",
        "substack.com",
        "blogspot.com",
        "wordpress.com",
    ]

    # Domains never returned as article results
    BLACKLISTED_DOMAINS = [
        "youtube.com",
        "youtu.be",
        "reddit.com",
        "quora.com",
        "pinterest.com",
    ]

    # File Extensions to Reject
    REJECTED_EXTENSIONS = ['.pdf', '.docx', '.pptx', '.zip', '.exe']

    PLACEHOLDER_THUMBNAIL = (
        "https://images.unsplash.com/photo-1515879218367-8466d910aaa4?w=640&h=360&fit=crop"
    )
