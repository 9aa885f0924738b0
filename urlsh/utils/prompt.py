from collections.abc import Callable


def confirm(message: str, input_func: Callable[[str], str] = input) -> bool:
    """Ask a yes/no question; only 'y' or 'yes' (any case) count as yes

    End of input counts as no.
    """
    try:
        answer = input_func(f'{message} [y/N]: ')
    except EOFError:
        return False
    return answer.strip().lower() in {'y', 'yes'}
