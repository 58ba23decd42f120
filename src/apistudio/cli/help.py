"""Help content for apistudio CLI."""

OVERVIEW = """
apistudio - API Testing Client

Compose HTTP requests, keep them in collections, substitute {{variables}}
from environments, send them and inspect the responses, or turn them into
curl / fetch / Python / axios snippets.

COMMANDS:
  list      List collections and their requests
  add       Save a new request
  remove    Delete a saved request
  show      Show a request as it would be sent
  send      Send a request and show the response
  code      Generate a code snippet for a request
  env       Manage environments (list, add, set, activate, deactivate)
  help      Show detailed help and examples

QUICK START:
  apistudio env add local --var base=http://localhost:8000
  apistudio env activate local
  apistudio add "List users" "{{base}}/users" -p page=1
  apistudio send "List users" --pretty

GLOBAL OPTIONS:
  --data-dir    Storage directory (default: ~/.config/apistudio)

For more help on a specific command, use: apistudio help <command>
"""

ADD_HELP = """
ADD COMMAND

Save a new request into a collection.

USAGE:
  apistudio add <name> <url> [OPTIONS]

OPTIONS:
  -X, --method TEXT       HTTP method (default: GET)
  -H, --header TEXT       Header as 'Key: Value' (repeatable)
  -p, --param TEXT        Query parameter as 'key=value' (repeatable)
  -d, --body TEXT         Request body
  --body-type TEXT        json, text, xml, html, urlencoded or form (default: json)
  --bearer TEXT           Bearer token
  --basic TEXT            Basic credentials as 'username:password'
  --api-key TEXT          API key header as 'Header-Name:value'
  -c, --collection TEXT   Target collection (default: My Requests)

EXAMPLES:
  # JSON POST with a token taken from the environment
  apistudio add "Create user" "{{base}}/users" -X POST \\
    -d '{"name": "Jane"}' --bearer "{{token}}"

  # Form-encoded body
  apistudio add "Login" api.example.com/login -X POST \\
    --body-type urlencoded -d "user=jane&pass=secret"

URLS WITHOUT A SCHEME:
  https:// is assumed, so "api.example.com/users" is sent to
  "https://api.example.com/users".
"""

SEND_HELP = """
SEND COMMAND

Send a saved request and show the response.

USAGE:
  apistudio send <request> [OPTIONS]

ARGUMENTS:
  request    Request name or ID

OPTIONS:
  -c, --collection TEXT   Look the request up in this collection only
  -E, --env TEXT          Use this environment instead of the active one
  --timeout FLOAT         Timeout in seconds (default: none)
  --pretty                Pretty-print JSON bodies
  --truncate INT          Truncate bodies to N characters
  --show-secrets          Do not mask sensitive headers
  --debug                 Enable debug logging to stderr

EXAMPLES:
  apistudio send "List users" --pretty
  apistudio send "List users" --env staging
"""

CODE_HELP = """
CODE COMMAND

Generate a code snippet equivalent to sending the request.

USAGE:
  apistudio code <request> [OPTIONS]

OPTIONS:
  -t, --target TEXT       curl, fetch, python or axios (default: curl)
  -c, --collection TEXT   Look the request up in this collection only
  -E, --env TEXT          Use this environment instead of the active one

EXAMPLES:
  apistudio code "Create user" --target python

NOTE:
  Basic credentials appear in plain text in snippets.
"""

ENV_HELP = """
ENV COMMAND

Manage environments. Variables are referenced as {{name}} in URLs, header
values, query values, bodies, bearer tokens and API key values. Unknown or
disabled variables are left as-is.

USAGE:
  apistudio env list
  apistudio env add <name> [--var key=value ...]
  apistudio env set <env> <key> <value> [--disabled]
  apistudio env activate <env>
  apistudio env deactivate

Only one environment is active at a time.
"""

COMMAND_HELP = {
    "add": ADD_HELP,
    "send": SEND_HELP,
    "code": CODE_HELP,
    "env": ENV_HELP,
}


def get_help(command: str | None = None) -> str:
    """Get help text for a command or overview.

    Args:
        command: Optional command name

    Returns:
        Help text string
    """
    if command is None:
        return OVERVIEW.strip()

    help_text = COMMAND_HELP.get(command.lower())
    if help_text is None:
        available = ", ".join(COMMAND_HELP)
        return f"Unknown command: {command}\n\nAvailable commands: {available}"

    return help_text.strip()
