from teamportal.common.exceptions import ResourceNotFound, ValidationFailed


class RevenueEntryNotFound(ResourceNotFound):
    default_detail = 'Revenue entry not found'


class RevenueInputInvalid(ValidationFailed):
    default_detail = 'No fields to update'
