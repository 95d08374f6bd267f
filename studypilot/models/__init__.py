# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from studypilot.models.study_file import StudyFile
from studypilot.models.goal import StudyGoal
from studypilot.models.study_plan import StudyPlan
from studypilot.models.daily_content import DailyStudyContent
from studypilot.models.profile import Profile

# table name -> ORM class, used by the SQL repository
MODELS_BY_TABLE = {
    model.__tablename__: model
    for model in (StudyFile, StudyGoal, StudyPlan, DailyStudyContent, Profile)
}

__all__ = [
    "StudyFile",
    "StudyGoal",
    "StudyPlan",
    "DailyStudyContent",
    "Profile",
    "MODELS_BY_TABLE",
]
