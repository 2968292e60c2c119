"""
Time entry mapper for converting between domain entities and database models.
"""

from consultdesk.domain.models.time_entry import TimeEntry
from consultdesk.infrastructure.db.models import TimeEntryModel, generate_id
from consultdesk.infrastructure.mappers.project_mapper import ProjectMapper


class TimeEntryMapper:
    """Maps between TimeEntry domain entity and TimeEntryModel database model."""

    def __init__(self):
        self.project_mapper = ProjectMapper()

    def domain_to_model(self, time_entry: TimeEntry) -> TimeEntryModel:
        """Convert TimeEntry domain entity to a new TimeEntryModel."""
        model = TimeEntryModel(
            id=time_entry.id or generate_id(),
            user_id=time_entry.user_id,
            project_id=time_entry.project_id,
            start_time=time_entry.start_time,
            end_time=time_entry.end_time,
            duration=time_entry.duration,
            is_running=time_entry.is_running,
            created_at=time_entry.created_at
        )
        self.update_details(model, time_entry)
        return model

    def update_details(self, model: TimeEntryModel, time_entry: TimeEntry) -> None:
        """Copy the editable, non-timing fields."""
        model.description = time_entry.description
        model.software_used = list(time_entry.software_used)
        model.problems_encountered = time_entry.problems_encountered
        model.updated_at = time_entry.updated_at

    def model_to_domain(self, model: TimeEntryModel, with_project: bool = False) -> TimeEntry:
        """Convert TimeEntryModel to TimeEntry domain entity."""
        project = None
        if with_project and model.project is not None:
            project = self.project_mapper.model_to_domain(model.project)

        return TimeEntry(
            id=model.id,
            user_id=model.user_id,
            project_id=model.project_id,
            description=model.description,
            start_time=model.start_time,
            end_time=model.end_time,
            duration=model.duration,
            is_running=bool(model.is_running),
            software_used=list(model.software_used or []),
            problems_encountered=model.problems_encountered,
            created_at=model.created_at,
            updated_at=model.updated_at,
            project=project
        )
