# shellhist

Building blocks for a shell history recorder: turning the raw lines that
bash, zsh and fish hand over after each command into clean history entries,
wiring the recorder's hook scripts into shell start-up files, and keeping its
settings (displayed columns, custom columns, colours, key bindings)
consistent.

The package has no runtime dependencies and needs Python 3.10 or later.

## Cleaning up what the shell reports

Bash reports the last command as a line from `history 1`, with the entry
number in front and, if `HISTTIMEFORMAT` is set, a timestamp before the
command itself. `shellhist.histtime` takes those apart:

```python
from shellhist.histtime import (
    build_regex_from_time_format,
    get_last_command,
    maybe_skip_bash_hist_time_prefix,
    parse_cross_platform_time,
    trim_trailing_whitespace,
)

get_last_command("   33  ls --aaaa foo bar ")            # "ls --aaaa foo bar"
maybe_skip_bash_hist_time_prefix(
    "2019-07-12 13:02:31 sudo apt update", "%F %T "
)                                                         # "sudo apt update"
build_regex_from_time_format("%Y ")                       # "[0-9]{4} "
parse_cross_platform_time("1696715149")                   # timezone-aware UTC datetime
trim_trailing_whitespace("ls /foo\n")                     # "ls /foo"
```

- `maybe_skip_bash_hist_time_prefix(cmd_line, time_format=None)` reads the
  `HISTTIMEFORMAT` environment variable when no format is given and returns
  the line unchanged when the format is empty.
- `parse_cross_platform_time` accepts Unix seconds or, for values of 18 or
  more digits, Unix nanoseconds, with or without the trailing `N` that some
  `date` implementations leave.
- Malformed history lines raise `HistoryLineError`; unsupported `%`
  directives in a time format raise `TimeFormatError`.

## Building history entries

`shellhist.histentry` turns the arguments a shell hook passes into a
`HistoryEntry` dataclass (user, host, command, working directory, home
directory, exit code, start and end time, device id, entry id and
`CustomColumn` values).

```python
from shellhist.histentry import build_history_entry, extract_command

entry = build_history_entry(
    ["prog", "saveHistoryEntry", "zsh", "120", "ls /foo\n", "1641774958"],
    device_id="device-1",
)
entry.command     # "ls /foo"
entry.exit_code   # 120

extract_command("bash", " 123  ls /foo  ")   # "ls /foo"
```

- `build_history_entry(args, homedir=None, device_id="", time_format=None,
  custom_columns=())` returns `None` when there are fewer than six arguments
  or when the command is empty or starts with a space.
- `extract_command(shell, arg, time_format=None)` handles bash, zsh and fish
  and raises `UnsupportedShellError` for anything else.
- `is_hidden_command(history_line, last_history_line)` tells whether bash
  repeated the previous line, which it does when a command was hidden.
- `build_custom_columns(columns)` runs each `CustomColumnDefinition` command
  with `bash -c` and collects its trimmed output; a non-zero exit is logged
  as a warning, not raised.
- `get_cwd(homedir)` returns the working directory abbreviated with `~` and
  the home directory.

## Shell start-up files

`shellhist.shellconfig` knows where the bash, zsh and fish hook scripts live
(`get_bash_config_path`, `get_zsh_config_path`, `get_fish_config_path`) and
where the user's `.zshrc` is (`get_zsh_rc_path`, honouring `ZDOTDIR`). It
builds the fragment that puts the tool on `PATH` and sources a hook script
(`config_fragment`), checks whether a start-up file already contains it
(`is_configured`) and appends it (`add_to_shell_config`), or, when
`skip_config_modification` is true, prints the lines for the user to add
instead. `does_bash_profile_need_config` says whether `.bash_profile` should
be configured too: always on macOS, on Linux only if the file already exists.

## Settings

- `shellhist.columns`: `add_custom_column` appends a
  `CustomColumnDefinition`, raising `DuplicateColumnError` when a column of
  the same name (compared case-insensitively) exists; `add_displayed_columns`
  appends displayed columns.
- `shellhist.colremove`: `delete_custom_column` removes a custom column and
  drops it from the displayed columns, raising `ColumnNotFoundError` if there
  is none of that name; `remove_columns` and `remove_default_search_columns`
  filter lists of names, the latter refusing to remove `command`.
- `shellhist.validators`: `validate_color` (`"#663399"` style), `parse_bool`
  (exactly `true` or `false`), `parse_log_level` (`error`, `warn`, `info`,
  `debug` to a `logging` level) and `validate_default_search_columns`, all
  raising `ConfigError`.
- `shellhist.settings`: the frozen `Settings` and `ColorScheme` dataclasses,
  with `set_bool_option` (by dashed option name such as `"beta-mode"` or
  `"presaving"`), `set_color` (`"selected-text"`, `"selected-background"`,
  `"border-color"`) and `set_default_search_columns` returning updated
  copies, and `format_displayed_columns`, `format_custom_columns` and
  `format_color_scheme` rendering them as text listings.
- `shellhist.keybindings`: the `KeyBindings` dataclass; `set_key_binding`
  returns a copy with an action rebound by its dashed name (`"page-up"`,
  `"select-entry-and-cd"`, ...) and raises `UnknownActionError` for unknown
  actions; `format_key_bindings` lists every action with its keys.

## Updates

`shellhist.update` provides the pieces of a self-update:

- `select_download_urls(update_info, system=None, machine=None)` picks the
  binary and attestation URLs for a platform from a mapping of update info.
- `download_file(filename, url)` downloads a file, replacing any existing one.
- `strip_code_signature(in_path, out_path)` runs `codesign_allocate` to strip
  a code signature.
- `assert_identical_binaries(bin1_path, bin2_path)` compares two files byte
  by byte and tolerates at most five differences.
- `get_tmp_client_path()` and `get_possibly_overridden_version(version)`
  honour `TMPDIR` and `HISHTORY_FORCE_CLIENT_VERSION`.

Failures raise `UpdateError`. Setting `HISHTORY_SIMULATE_NETWORK_ERROR`
makes `download_file` fail without touching the network.

## What the package does not do

It is a library only. There is no command-line program, no storage of
history entries or settings on disk, no syncing with a server and no
attestation check of downloaded binaries; the package also does not remove
configuration fragments from shell start-up files or install a binary. Those
parts are left to the application that uses these building blocks.

## Running the tests

Install the `test` extra and run pytest from the project directory.