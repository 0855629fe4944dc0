from quietseed.core.config import settings
from quietseed.core.logging import configure_logging
from quietseed.services.seed import seed_demo_content
from quietseed.storage import build_storage

def seed_blog():
    configure_logging(settings.LOG_LEVEL)
    print(f"Creating database and tables ({settings.STORAGE_BACKEND})...")
    storage = build_storage(settings)

    if seed_demo_content(storage):
        posts = storage.get_all_posts()
        print(f"Successfully seeded {len(posts)} posts!")
    else:
        print("Database already seeded. Skipping.")

if __name__ == "__main__":
    seed_blog()
