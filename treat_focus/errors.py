class TreatFocusError(Exception):
    pass


class ConfigurationError(TreatFocusError):
    pass


class NothingToDonateError(TreatFocusError):
    pass


class InvalidTransitionError(TreatFocusError):
    def __init__(self, action: str, status: str):
        super().__init__(f"cannot {action} while {status}")
        self.action = action
        self.status = status


class SessionRunningError(TreatFocusError):
    pass
