from datetime import datetime
from models.db import db

DEFAULT_WORKOUTS = {
    "Monday": "Leg Day",
    "Tuesday": "Chest",
    "Wednesday": "Full-Body",
    "Thursday": "Back",
    "Friday": "Leg Day",
    "Saturday": "Full-Body",
    "Sunday": "Rest",
}

class WorkoutSchedule(db.Model):
    __tablename__ = "workout_schedules"

    id = db.Column(db.Integer, primary_key=True)
    version = db.Column(db.Integer, nullable=False, default=1)

    start_date = db.Column(db.Date, nullable=True)
    end_date = db.Column(db.Date, nullable=True)
    workouts = db.Column(db.JSON, nullable=False, default=lambda: dict(DEFAULT_WORKOUTS))

    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    updated_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)

    def to_dict(self):
        return {
            "version": self.version,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "workouts": self.workouts,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
