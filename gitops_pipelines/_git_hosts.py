"""Map Git repository URLs to their push-event trigger bindings.

Each supported Git hosting service ships a Tekton ``TriggerBinding`` that
extracts the fields of its push webhook payload. The binding to use for an
environment's CI pipeline is picked from the host of the GitOps repository
URL. Hosts without a registered binding resolve to no bindings at all, which
leaves the pipeline without a push trigger rather than failing.

Examples
--------
>>> resolve_host("https://github.com/foo/bar")
'github-push-binding'
>>> push_bindings("https://git.example.com/foo/bar")
[]
"""

from __future__ import annotations

from urllib.parse import urlsplit

__all__ = [
    "GIT_HOST_BINDINGS",
    "push_bindings",
    "register_git_host",
    "resolve_host",
]

GIT_HOST_BINDINGS: dict[str, str] = {
    "github.com": "github-push-binding",
    "gitlab.com": "gitlab-push-binding",
}


def _hostname(url: str) -> str:
    """Return the lower-cased host of *url* without credentials or port.

    Examples
    --------
    >>> _hostname("https://user@GitHub.com:443/foo/bar.git")
    'github.com'
    >>> _hostname("")
    ''
    """
    if not url:
        return ""
    try:
        host = urlsplit(url.strip()).hostname
    except ValueError:
        return ""
    return host or ""


def register_git_host(host: str, binding: str) -> None:
    """Register (or replace) the push binding used for *host*.

    Parameters
    ----------
    host
        Host name as it appears in repository URLs, e.g. ``gitea.example.com``.
    binding
        Name of the push ``TriggerBinding`` for that host.

    Raises
    ------
    ValueError
        If either value is blank.
    """
    host = host.strip().lower()
    if not host or not binding.strip():
        msg = "host and binding must not be blank"
        raise ValueError(msg)
    GIT_HOST_BINDINGS[host] = binding.strip()


def resolve_host(url: str) -> str | None:
    """Return the push binding name for the host of *url*.

    Parameters
    ----------
    url
        Repository URL; an https scheme is assumed.

    Returns
    -------
    str | None
        The registered binding name, or ``None`` for an empty or unknown host.
    """
    host = _hostname(url)
    if not host:
        return None
    return GIT_HOST_BINDINGS.get(host)


def push_bindings(url: str) -> list[str]:
    """Return the trigger bindings for *url* as a list.

    Unknown hosts yield an empty list; this never raises.
    """
    binding = resolve_host(url)
    return [binding] if binding else []
