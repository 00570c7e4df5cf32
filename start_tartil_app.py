from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from tartil_app import create_app
from tartil_app.modules.hifz.interface import HifzInterface

app = create_app()

if __name__ == '__main__':
    import sys

    learner_id = sys.argv[1] if len(sys.argv) > 1 else 'demo-learner'

    with app.app_context():
        due = HifzInterface.get_due_reviews(learner_id)
        progress = HifzInterface.get_progress(learner_id)
        app.logger.info(
            f"Learner {learner_id}: {progress.total} verses queued, "
            f"{progress.due_today} due today, showing {len(due)}"
        )
        for item in due:
            print(f"{item.verse_key}\t{item.status}\tinterval={item.interval_days}d")
