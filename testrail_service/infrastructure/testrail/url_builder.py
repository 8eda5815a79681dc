"""
TestRail endpoint URL building.
"""
from typing import Optional, Union

from testrail_service.core.domain.commands import TestRailCommand
from testrail_service.core.domain.parameters import ApiParameters

HOSTED_URL_TEMPLATE = "https://{client_id}.testrail.com"
ENDPOINT_SUFFIX = "index.php?/api/{version}/{{command}}{{params}}"


def endpoint_template(
    client_id: Optional[str] = None,
    base_url: Optional[str] = None,
    api_version: str = "v2"
) -> str:
    """Build the endpoint template for a hosted account or a self-hosted URL.

    Args:
        client_id: Hosted account id, the ``foo`` in ``foo.testrail.com``
        base_url: Full instance URL (e.g. "https://server/testrail/"); wins over client_id
        api_version: API version segment

    Returns:
        Template with ``{command}`` and ``{params}`` placeholders

    Raises:
        ValueError: If neither client_id nor base_url is given
    """
    if base_url:
        root = base_url.rstrip('/')
    elif client_id:
        root = HOSTED_URL_TEMPLATE.format(client_id=client_id)
    else:
        raise ValueError("Either a client ID or a base URL is required")
    return f"{root}/" + ENDPOINT_SUFFIX.format(version=api_version)


def build_url(
    template: str,
    command: Union[TestRailCommand, str],
    params: Union[ApiParameters, str, None] = None
) -> str:
    """Interpolate a command and its parameters into the endpoint template.

    Params are not validated; a bad parameter string gives a bad URL and
    TestRail reports the error.

    Example:
        >>> build_url("https://x.testrail.com/index.php?/api/v2/{command}{params}",
        ...           "get_case", "7")
        'https://x.testrail.com/index.php?/api/v2/get_case/7'
    """
    rendered = str(params) if params else ""
    arg_string = f"/{rendered}" if rendered else ""
    return template.format(command=str(command), params=arg_string)
