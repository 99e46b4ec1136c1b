"""Exceptions raised by the progress engine and its store."""


class CourseTrackError(Exception):
    """Base class for coursetrack errors."""


class CourseNotStarted(CourseTrackError):
    """A lesson was completed for a course the user never started."""

    def __init__(self, user_id: str, course_id: str):
        self.user_id = user_id
        self.course_id = course_id
        super().__init__(f"Course not started: {course_id} (user {user_id}). Start the course first.")


class UnknownCourse(CourseTrackError):
    """Course ID is not in the catalog."""

    def __init__(self, course_id: str):
        self.course_id = course_id
        super().__init__(f"Unknown course: {course_id}")


class StoreUnavailable(CourseTrackError):
    """The progress store could not complete an operation. Safe to retry."""


class InvariantViolation(CourseTrackError):
    """Stored or computed progress breaks a progress invariant."""


class UnknownLesson(CourseTrackError):
    """Lesson ID is not part of the course in the catalog."""

    def __init__(self, course_id: str, lesson_id: str):
        self.course_id = course_id
        self.lesson_id = lesson_id
        super().__init__(f"Unknown lesson: {lesson_id} (course {course_id})")
