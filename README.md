# plugbox

Building blocks for chat-bot plugins. Each module holds the logic of one
plugin: command parsing, reply text, storage and image rendering. None of it
depends on a bot framework. You call these functions from your own bot's
event handlers.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `plugbox.emojimix`: finds a pair of mixable emoji in a message. The
  message can be two segments (`Segment`, `face_to_emoji`, which maps QQ face
  ids to emoji) or raw text two characters long (`match`). It also builds
  the two candidate Emoji Kitchen sticker URLs (`mix_urls`) and returns the
  first one that answers a HEAD request with 200 (`find_mix`).
- `plugbox.event`: auto-accept switches for friend requests and group
  invites, stored as an `AutoAccept` flag. Covers `parse_switch`,
  `apply_switch` and `should_auto_accept`. Request flags are turned into
  four base16384 characters and back (`encode_flag`, `decode_flag`).
  `parse_decision` parses "同意/拒绝 申请/邀请 <flag> [reason]" commands into
  a `Decision`. `format_invite_notice` and `format_friend_notice` build the
  messages sent to the owner.
- `plugbox.driftbottle`: drift bottles kept in SQLite. `Sea` has `throw`,
  `pick` and `close` and works as a context manager. Also provides `Bottle`,
  `make_bottle` (the id is a signed CRC-64/ISO of the contents, see
  `crc64_iso`), `validate_message` (unescapes chat codes and needs at least
  10 characters) and `format_bottle`.
- `plugbox.diana`: essays kept in SQLite. `TextStore` has `add`, `random`,
  `hentai`, `count` and `close`. Also provides `text_id` and `parse_teach`.
- `plugbox.funny`: jokes kept in SQLite, with `%name` replaced by the
  listener's name. `JokeStore` has `pick`, `count` and `close`. Also
  provides `fill_name`.
- `plugbox.fortune`: daily fortune slips.
  - Background kinds: `kind_index`, `kind_for`.
  - Vertical right-to-left text layout: `rows_num`, `offset`,
    `glyph_positions`.
  - Cache file names: `cache_name`.
  - Picking a background out of a zip archive: `load_background`.
  - Drawing the slip with Pillow and a TrueType font you supply: `draw`.
- `plugbox.epidemic`: per-city epidemic figures. Provides `query`,
  `parse_result`, `find_city`, `format_area` and the `Area` tree.
- `plugbox.github`: repository search through the GitHub API. Provides
  `search`, `parse_command` (for `>github [-p |-t ]query`), `format_repo`,
  `image_url` and `notnull`.
- `plugbox.genshin`: a ten-pull gacha simulator over a zip archive of card
  art. `Gacha` has `draw`, `render` and `close`, and `draw` returns a
  `DrawResult`. The pool setting is one bit of an integer (`is_five_star_mode`,
  `set_mode`). `reply_text` lists the five-star items drawn.
- `plugbox.dress`: dress-up albums. Provides `dress_list`, `detail`,
  `image_urls`, `format_menu`, `parse_choice` and `sex_for`.
- `plugbox.gifcmd`: parses picture-meme commands into an `Invocation`
  (`parse_command`). `UserContext` manages a user's working directory and
  downloads avatars (`prepare_logos`) and picture materials
  (`material_path`, `material_range`). It also builds the download links
  (`logo_url`, `material_url`).
- `plugbox.font`: picks a font file for a "用xxx体" choice (`font_for`,
  `parse_render`) and renders wrapped text to a PNG returned as base64
  (`render_text`). Passing `None` as the font path uses Pillow's built-in
  font.

## Example

```python
from plugbox.emojimix import match, mix_urls

pair = match([], "😀🐱")
if pair is not None:
    first, second = pair
    print(mix_urls(first, second))
```

```python
from plugbox.driftbottle import Sea, make_bottle, format_bottle

with Sea("sea.db") as sea:
    sea.throw(make_bottle(10001, 20002, "2022-12-10 12:00:00", "alice",
                          "hello from across the sea"))
    print(format_bottle(sea.pick(), "bot"))
```

## What it does not do

- It does not connect to a chat service and has no command-line program.
  Receiving messages, checking permissions, rate limiting and sending
  replies are up to your bot.
- It ships no data files. You provide the font files (`font.FONTS` and
  `font.DEFAULT_FONT` name paths under `data/Font/`), the fortune
  backgrounds and slip texts, the gacha art archive, and the essay and joke
  databases.
- `plugbox.gifcmd` maps each command to an effect name and fetches the
  avatars and materials for it. It does not draw the picture effects
  themselves.