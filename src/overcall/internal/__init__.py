from collections.abc import Iterator
from contextlib import contextmanager


@contextmanager
def wrap_exc(
    error_type: type[Exception],
    *,
    prefix: str,
    catch: type[Exception] | tuple[type[Exception], ...] | None = None,
) -> Iterator[None]:
    """Wrap exceptions and re-raise them as `error_type` with a message prefix.

    `catch` defaults to `error_type`. `error_type` must be initializable with a single string
    message argument. The original exception is kept as the `__cause__`.

    NOTE: When used inside a generator, any exceptions raised by the *caller of the generator* will
    **not** be wrapped.
    """
    caught = error_type if catch is None else catch
    try:
        yield
    except caught as e:
        msg = str(e)
        if isinstance(e, error_type) and getattr(e, "wrapped", False) and e.__cause__ is not None:
            src = e.__cause__  # Shorten exception chains to the root and last wrapped only
        else:
            msg = f" - {type(e).__name__}: {msg}" if catch is not None else f" - {msg}"
            src = e
        error = error_type(f"{prefix}{msg}")
        error.wrapped = True  # type: ignore[attr-defined]
        raise error from src
