# hammerclock

A terminal-based chess clock and turn/phase tracker for tabletop games.

Hammerclock keeps time for each player, tracks whose turn it is, counts
turns, steps through the phases of the chosen ruleset and keeps an action
log per player. Rulesets for Warhammer 40K, Kill Team, Necromunda, Age of
Sigmar, Warcry, Blood Bowl, Bunny Kingdom and Chess are built in.

## Installation

```
pip install .
```

## Running

```
hammerclock                     # run with the default options file
hammerclock -o myOptions.json   # run with a custom options file
hammerclock -h                  # show help
```

If the given options file is missing or cannot be parsed, `default.json` is
used instead; if that is missing too, it is created in the current directory
from the built-in defaults. Player actions are appended to `logs.csv` in the
current directory.

## Keys

| Key     | Action                                            |
|---------|---------------------------------------------------|
| `S`     | Start, pause or resume the game                   |
| `E`     | End the game, after confirmation (once started)   |
| `SPACE` | Switch turns                                      |
| `P`     | Next phase                                        |
| `B`     | Previous phase                                    |
| `O`     | Toggle the options screen                         |
| `A`     | Toggle the about screen                           |
| `Q`     | Quit, after confirmation                          |

A left click on a player's panel gives that player the turn, for example to
choose who goes first before starting the game.

## Options file

The options file is JSON:

```json
{
  "default": 0,
  "rules": [
    {"name": "Chess", "phases": [], "oneTurnForAllPlayers": true}
  ],
  "playerCount": 2,
  "playerNames": ["Player 1", "Player 2"],
  "colorPalette": "warhammer",
  "timeFormat": "AMPM",
  "loggingEnabled": true
}
```

`default` is the index of the selected ruleset in `rules`. `colorPalette` is
one of `k9s`, `dracula`, `monokai`, `warhammer` or `killteam`; unknown names
give `k9s`. `timeFormat` `AMPM` shows a 12-hour clock; any other value shows
a 24-hour clock. When a ruleset has `oneTurnForAllPlayers` set, its phases
are not shown.

## Using it as a library

The game state lives in `hammerclock.model.Model` and changes through
`hammerclock.update.update(msg, model)`, which takes a message from
`hammerclock.messages` and returns the new model and a command (or `None`).
Calling the command returns the next message to feed back in.

```python
from hammerclock.model import new_model
from hammerclock.messages import StartGameMsg, TickMsg, SwitchTurnsMsg
from hammerclock.update import update

model = new_model()
model, _ = update(StartGameMsg(), model)
model, _ = update(TickMsg(), model)
model, _ = update(SwitchTurnsMsg(), model)
print([(p.name, p.time_elapsed, p.turn_count) for p in model.players])
```

Messages that record an action (start, pause, turn and phase changes, ending
the game) also append to `logs.csv` in the current directory through
`hammerclock.actionlog`; call `hammerclock.actionlog.cleanup()` to flush it.

Options are loaded and saved with `hammerclock.options.load_options` and
`hammerclock.options.save_options`; `save_options` raises `OSError` when the
file cannot be written. Text helpers such as
`hammerclock.textviews.format_duration` and `status_text` are usable on
their own.

## Limitations

- Changes made on the options screen apply to the running session only;
  they are not written back to the options file.
- Changing the player count on the options screen does not add or remove
  player panels; the players are those set up at start.
- The `loggingEnabled` option is stored but does not turn the CSV log off.

## Tests

```
pip install .[test]
pytest
```