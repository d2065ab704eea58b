"""Starter .inputguard.toml template."""

DEFAULT_TOML = """\
# inputguard configuration
version = "1.0"

[scanner]
strict_mode = false               # report MEDIUM threats as HIGH
stop_on_first_threat = false      # stop at the first threat found
include_value_in_response = false # echo field values into results
# categories = ["sqlInjection", "xss"]   # empty = all five

[output]
format = "terminal"       # terminal | json
show_summary = true
redact_tokens = true      # hide leaked credentials in reports

[patterns]
directory = ".inputguard-patterns"   # YAML files with custom patterns
"""
