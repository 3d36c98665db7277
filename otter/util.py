import hashlib
from typing import Callable


class ClassPropertyDescriptor:
    """
    Read-only descriptor that calls a classmethod on attribute access
    """

    def __init__(self, fget: classmethod) -> None:
        self.fget = fget

    def __get__(self, obj, klass=None):
        if klass is None:
            klass = type(obj)
        return self.fget.__get__(obj, klass)()


def classproperty(func: Callable) -> ClassPropertyDescriptor:
    """
    Read-only property on the class, subclasses may shadow it with a plain class attribute
    """
    if not isinstance(func, (classmethod, staticmethod)):
        func = classmethod(func)

    return ClassPropertyDescriptor(func)


def gravatar_link(email: str) -> str:
    """
    :param email: user email address
    :return: protocol relative link to the gravatar photo of the user
    """
    email_hash = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"//www.gravatar.com/avatar/{email_hash}"
