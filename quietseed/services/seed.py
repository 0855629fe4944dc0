import logging

from quietseed.core.config import settings
from quietseed.services.auth import AuthService
from quietseed.storage import Storage

logger = logging.getLogger(__name__)

CATEGORIES = [
    {"name": "Reflection", "slug": "reflection", "description": "Thoughtful reflections on mindful living"},
    {"name": "How-To", "slug": "how-to", "description": "Practical guides for mindful practices"},
    {"name": "Story", "slug": "story", "description": "Personal stories of transformation"},
    {"name": "Philosophy", "slug": "philosophy", "description": "Exploring philosophical aspects of mindfulness"},
]

# category is an index into CATEGORIES; featured arrives as a form string
POSTS = [
    {
        "title": "Finding Stillness in a Busy World",
        "slug": "finding-stillness-in-a-busy-world",
        "content": "<p>In the hustle of modern life, we often forget to pause and listen to the quietness within. The constant notifications, endless to-do lists, and societal pressure to always be productive can leave us feeling disconnected from ourselves and the world around us.</p>",
        "excerpt": "In the hustle of modern life, we often forget to pause and listen to the quietness within. This reflection explores how to create moments of tranquility even on the busiest days...",
        "image_url": "https://images.unsplash.com/photo-1598901847919-b95dd0fabbb0?ixlib=rb-4.0.3&auto=format&fit=crop&w=1400&q=80",
        "published_at": "2023-06-12",
        "category": 0,
        "featured": "true",
    },
    {
        "title": "5 Simple Morning Rituals for Inner Peace",
        "slug": "5-simple-morning-rituals",
        "content": "<p>Morning routines set the tone for your entire day. When we begin our day mindfully, we're more likely to carry that sense of calm and intention throughout our hours.</p>",
        "excerpt": "Start your day with intention and calm. These five morning practices take just minutes but can transform your entire day...",
        "image_url": "https://images.unsplash.com/photo-1532686942355-a422d8144d29?ixlib=rb-4.0.3&auto=format&fit=crop&w=500&q=80",
        "published_at": "2023-05-28",
        "category": 1,
        "featured": "false",
    },
    {
        "title": "The Forgotten Art of Letter Writing",
        "slug": "forgotten-art-of-letter-writing",
        "content": "<p>In our digital age of instant messages and quick emails, the art of letter writing has become increasingly rare. Yet there's something uniquely meaningful about putting pen to paper.</p>",
        "excerpt": "In a world of instant messages, discover why putting pen to paper can become a profound mindfulness practice and deepen your connections...",
        "image_url": "https://images.unsplash.com/photo-1635445525049-e4bd640a8850?ixlib=rb-4.0.3&auto=format&fit=crop&w=500&q=80",
        "published_at": "2023-05-15",
        "category": 3,
        "featured": "false",
    },
    {
        "title": "What I Learned From a Month Without Internet",
        "slug": "month-without-internet",
        "content": "<p>Last summer, I made a decision that many would consider radical: I spent an entire month in a remote countryside cottage with no internet connection.</p>",
        "excerpt": "A personal journey through thirty days of digital detox in a remote countryside cottage changed my relationship with technology forever...",
        "image_url": "https://images.unsplash.com/photo-1472157592780-9e5265f17f8f?ixlib=rb-4.0.3&auto=format&fit=crop&w=500&q=80",
        "published_at": "2023-05-05",
        "category": 2,
        "featured": "false",
    },
]

def seed_demo_content(storage: Storage) -> bool:
    """Create the admin account, an author, categories and sample posts.

    Does nothing when the admin account already exists. Returns whether
    anything was written.
    """
    if storage.get_user_by_username(settings.ADMIN_USERNAME):
        logger.info("Admin user %r already exists. Skipping seed.", settings.ADMIN_USERNAME)
        return False

    auth = AuthService(storage)
    auth.register_user(
        settings.ADMIN_USERNAME,
        settings.ADMIN_PASSWORD,
        display_name=settings.ADMIN_DISPLAY_NAME,
        is_admin=True,
    )
    author = storage.get_user_by_username(settings.DEMO_AUTHOR_USERNAME) or auth.register_user(
        settings.DEMO_AUTHOR_USERNAME,
        settings.DEMO_AUTHOR_PASSWORD,
        display_name=settings.DEMO_AUTHOR_DISPLAY_NAME,
    )

    categories = [
        storage.get_category_by_slug(data["slug"]) or storage.create_category(data)
        for data in CATEGORIES
    ]

    created = 0
    for data in POSTS:
        if storage.get_post_by_slug(data["slug"]):
            continue
        fields = {key: value for key, value in data.items() if key != "category"}
        fields["category_id"] = categories[data["category"]].id
        fields["author_id"] = author.id
        storage.create_post(fields)
        created += 1

    logger.info("Seeded %d categories and %d posts", len(categories), created)
    return True
