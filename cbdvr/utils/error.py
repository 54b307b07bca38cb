import traceback


def error_dict(ex: BaseException) -> dict:
    err = {
        "err_type": type(ex).__name__,
        "err_msg": str(ex),
    }
    if ex.__traceback__ is not None:
        err["stacktrace"] = "".join(traceback.format_exception(type(ex), ex, ex.__traceback__))
    return err
