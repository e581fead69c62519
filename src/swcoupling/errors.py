ERR_NONE = 0
ERR_MEMORY = 101
ERR_API_OUTBOUNDS = 501
ERR_API_INPUTNOTOPEN = 502
ERR_API_SIM_NRUNNING = 503
ERR_API_OBJECT_INDEX = 505

ERROR_MESSAGES = {
    ERR_NONE: "no error",
    ERR_MEMORY: "memory allocation error",
    ERR_API_OUTBOUNDS: "opening geometry out of bounds",
    ERR_API_INPUTNOTOPEN: "project not opened",
    ERR_API_SIM_NRUNNING: "simulation already running",
    ERR_API_OBJECT_INDEX: "invalid object index",
}


def error_message(code: int) -> str:
    return ERROR_MESSAGES.get(code, f"unknown error code {code}")


class CouplingError(Exception):
    code = ERR_NONE

    def __init__(self, message: str = "", code: int | None = None):
        if code is not None:
            self.code = code
        super().__init__(message or error_message(self.code))


class InvalidIndex(CouplingError, LookupError):
    code = ERR_API_OBJECT_INDEX


class InvalidGeometry(CouplingError, ValueError):
    code = ERR_API_OUTBOUNDS


class OutOfMemory(CouplingError, MemoryError):
    code = ERR_MEMORY


class LifecycleViolation(CouplingError, RuntimeError):
    code = ERR_API_INPUTNOTOPEN
