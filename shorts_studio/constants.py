"""
Shorts Studio - 定数定義
"""

# === 台本生成のデフォルト値 ===
DEFAULT_TONE = "Energetic"
DEFAULT_DURATION_SECONDS = "45"
DEFAULT_AUDIENCE = "General viewers"

# === YouTube ===
YOUTUBE_CATEGORY_PEOPLE_BLOGS = "22"  # People & Blogs（Shortsと相性が良い）
YOUTUBE_UPLOAD_PARTS = "snippet,status"
YOUTUBE_WATCH_URL_TEMPLATE = "https://youtube.com/watch?v={video_id}"
DEFAULT_VIDEO_MIMETYPE = "video/mp4"

PRIVACY_PUBLIC = "public"
PRIVACY_UNLISTED = "unlisted"
PRIVACY_PRIVATE = "private"
PRIVACY_STATUSES = frozenset({PRIVACY_PUBLIC, PRIVACY_UNLISTED, PRIVACY_PRIVATE})
DEFAULT_PRIVACY_STATUS = PRIVACY_UNLISTED

# コードブロックの区切り
FENCE_MARKER = "```"
