from teamportal.common.exceptions import ResourceConflict, ResourceNotFound, ValidationFailed


class TimeBlockInvalid(ValidationFailed):
    default_detail = 'endAt must be after startAt'


class TimeBlockOverlap(ResourceConflict):
    default_detail = 'Time block overlaps an existing block'


class TimeBlockNotFound(ResourceNotFound):
    default_detail = 'Time block not found'
