class ApplicationError(Exception):
    pass

class InvalidPatientName(ApplicationError):
    pass

class UnexpectedError(ApplicationError):
    pass
