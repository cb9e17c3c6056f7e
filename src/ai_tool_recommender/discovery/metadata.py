"""Static vocabulary used by query normalization, scoring and task analysis.

The catalog and its users mix Japanese and English, so every table carries
both surface forms.
"""

# Synonym groups - maps canonical concept keys to alternate surface forms.
# Every alternate is a single token (no whitespace or comma) and appears in
# exactly one group; normalize() relies on both properties.
SYNONYMS: dict[str, list[str]] = {
    "image": [
        "画像",
        "がぞう",
        "イラスト",
        "写真",
        "絵",
        "グラフィック",
        "ビジュアル",
        "picture",
        "illustration",
        "photo",
        "graphic",
        "visual",
    ],
    "generate": [
        "生成",
        "作成",
        "制作",
        "作る",
        "作図",
        "つくる",
        "create",
        "creation",
        "make",
        "generation",
    ],
    "translate": [
        "翻訳",
        "通訳",
        "変換",
        "多言語",
        "translation",
        "translator",
        "multilingual",
    ],
    "audio": [
        "音声",
        "音",
        "声",
        "ボイス",
        "オーディオ",
        "話す",
        "voice",
        "sound",
        "speech",
    ],
    "video": ["動画", "映像", "ビデオ", "ムービー", "動く", "movie", "film", "clip"],
    "code": [
        "コード",
        "プログラム",
        "プログラミング",
        "開発",
        "コーディング",
        "program",
        "programming",
        "coding",
        "development",
    ],
    "text": [
        "文章",
        "テキスト",
        "記事",
        "コピー",
        "ライティング",
        "文字",
        "writing",
        "article",
        "copy",
        "copywriting",
    ],
    "free": ["無料", "フリー", "無償", "タダ", "0円", "gratis", "freemium"],
    "cheap": [
        "安い",
        "リーズナブル",
        "手頃",
        "低価格",
        "コスパ",
        "affordable",
        "inexpensive",
        "budget",
        "low-cost",
    ],
    "easy": [
        "簡単",
        "シンプル",
        "初心者",
        "使いやすい",
        "分かりやすい",
        "simple",
        "beginner",
        "beginners",
        "intuitive",
    ],
}

# Concept keys that trigger the plain-search bonuses
FREE_CONCEPT = "free"
EASY_CONCEPT = "easy"

# Terms containing one of these count as asking for a beginner-friendly tool
BEGINNER_QUERY_MARKERS: tuple[str, ...] = ("easy", "beginner", "初心者", "簡単")

# A con containing one of these makes a tool unsuitable for beginners
DIFFICULTY_MARKERS: tuple[str, ...] = (
    "technical",
    "difficult",
    "learning curve",
    "complex",
    "技術的",
    "難しい",
    "学習曲線",
)

# Budget strings that mean "free tools only"
FREE_BUDGET_MARKERS: frozenset[str] = frozenset({"free", "無料", "フリー", "無償", "0円"})

# Technical levels that exclude tools that are not beginner-friendly
BEGINNER_LEVELS: frozenset[str] = frozenset({"beginner", "初心者"})

# Task categories and the keywords that identify them in free text
TASK_CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "writing": [
        "文書作成",
        "コンテンツ作成",
        "ブログ",
        "記事",
        "レポート",
        "blog",
        "article",
        "report",
        "copywriting",
        "writing",
    ],
    "image generation": [
        "イラスト",
        "デザイン",
        "アート",
        "画像作成",
        "ビジュアル",
        "illustration",
        "design",
        "artwork",
        "image",
    ],
    "code development": [
        "プログラミング",
        "開発",
        "コーディング",
        "デバッグ",
        "テスト",
        "programming",
        "coding",
        "debug",
        "testing",
        "code",
    ],
    "data analysis": [
        "分析",
        "統計",
        "可視化",
        "レポート",
        "analysis",
        "statistics",
        "visualization",
        "dashboard",
    ],
    "audio processing": [
        "音声合成",
        "音声認識",
        "音楽",
        "オーディオ",
        "speech",
        "voice",
        "music",
        "audio",
    ],
    "video editing": [
        "動画作成",
        "編集",
        "モーショングラフィックス",
        "アニメーション",
        "video",
        "editing",
        "animation",
    ],
    "translation": [
        "多言語",
        "翻訳",
        "ローカライズ",
        "言語変換",
        "translation",
        "translate",
        "localization",
    ],
    "chatbot": [
        "会話",
        "カスタマーサポート",
        "アシスタント",
        "自動応答",
        "chatbot",
        "conversation",
        "customer support",
        "assistant",
    ],
}

OTHER_CATEGORY = "other"
