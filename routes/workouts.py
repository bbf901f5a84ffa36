from flask import Blueprint, g, jsonify
from models import db
from models.workout_schedule import DEFAULT_WORKOUTS, WorkoutSchedule
from security.rbac import require_admin
from utils.audit import log_event
from utils.dates import parse_date
from utils.request_body import json_object
from utils.seed import get_or_create_schedule

workouts_bp = Blueprint("workouts", __name__, url_prefix="/workout_schedule")

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@workouts_bp.get("")
def get_schedule():
    schedule = WorkoutSchedule.query.order_by(WorkoutSchedule.id.asc()).first()
    if schedule is None:
        schedule = WorkoutSchedule(version=1, workouts=dict(DEFAULT_WORKOUTS))
    return jsonify(data=schedule.to_dict()), 200


@workouts_bp.put("")
@require_admin
def update_schedule():
    data = json_object()
    workouts = data.get("workouts")
    if not isinstance(workouts, dict) or not workouts:
        return jsonify(error="workouts must be a non-empty object"), 400

    unknown = set(workouts) - set(WEEKDAYS)
    if unknown:
        return jsonify(error="Unknown weekday(s)", days=sorted(unknown)), 400
    if any(not isinstance(v, str) or not v.strip() for v in workouts.values()):
        return jsonify(error="Each workout must be a non-empty string"), 400

    try:
        start_date = parse_date(data.get("startDate"))
        end_date = parse_date(data.get("endDate"))
    except ValueError:
        return jsonify(error="Invalid startDate/endDate. Use YYYY-MM-DD"), 400
    if start_date and end_date and end_date < start_date:
        return jsonify(error="endDate must not be before startDate"), 400

    schedule = get_or_create_schedule()
    merged = dict(schedule.workouts or DEFAULT_WORKOUTS)
    merged.update({day: label.strip() for day, label in workouts.items()})

    schedule.workouts = {day: merged[day] for day in WEEKDAYS if day in merged}
    schedule.start_date = start_date
    schedule.end_date = end_date
    schedule.version = (schedule.version or 0) + 1
    schedule.updated_by = g.user.id
    db.session.commit()

    log_event("WORKOUT_SCHEDULE_UPDATE", user_id=g.user.id, entity="workout_schedule",
              entity_id=schedule.id, metadata={"version": schedule.version})
    return jsonify(data=schedule.to_dict()), 200
