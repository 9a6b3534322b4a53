import os
from typing import Dict, List
from dotenv import load_dotenv

# Load environment variables
load_dotenv(dotenv_path=os.path.join(os.getcwd(), '.env'))

# Server Settings
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))

# News Sources (Google News search feeds, fetched in this order)
BREACH_FEEDS: Dict[str, str] = {
    "Data Breach": "https://news.google.com/rss/search?q=data+breach&hl=en-US&gl=US&ceid=US:en",
    "Ransomware": "https://news.google.com/rss/search?q=ransomware+attack&hl=en-US&gl=US&ceid=US:en",
    "Data Leak": "https://news.google.com/rss/search?q=data+leak&hl=en-US&gl=US&ceid=US:en",
    "Cybersecurity Incident": "https://news.google.com/rss/search?q=cybersecurity+incident&hl=en-US&gl=US&ceid=US:en",
}

# Fetch Settings
FEED_DELAY_SECONDS = float(os.getenv("FEED_DELAY_SECONDS", "1.0"))  # Pause between feeds
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "15"))
USER_AGENT = os.getenv("USER_AGENT", "Weekly Breach Monitor/1.0 (Mozilla/5.0 compatible)")

# Application Settings
RECENT_ARTICLES_DAYS = 7       # Report window
TOP_KEYWORDS = 5               # Keywords kept per article
CACHE_TTL_SECONDS = int(os.getenv("CACHE_TTL_SECONDS", "3600"))
REFRESH_INTERVAL_HOURS = float(os.getenv("REFRESH_INTERVAL_HOURS", "24"))  # 0 disables

# Words that are frequent in news copy but carry no topic
EXTRA_STOPWORDS: List[str] = ["said", "also", "would", "according", "reported", "news"]

# Output Settings
OUTPUT_DIR = os.getenv("OUTPUT_DIR", "public")
LOG_DIR = os.getenv("LOG_DIR", "logs")
