# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Source text wrapper for rendering position-tagged diagnostics.
Used for both pattern syntax errors and lexical errors.
'''

from bisect import bisect_right


class Source:

  def __init__(self, name:str, text:str) -> None:
    assert isinstance(text, str)
    self.name = name
    self.text = text
    self.newline_positions:list[int] = []
    self._scanned_to = 0


  def __repr__(self) -> str:
    return f'{type(self).__name__}({self.name!r}, text=<str[{len(self.text)}]>)'


  def update_line_positions(self, pos:int) -> None:
    'Lazily update the newline positions array up to `pos`.'
    text = self.text
    for i in range(self._scanned_to, pos):
      if text[i] == '\n': self.newline_positions.append(i)
    self._scanned_to = max(self._scanned_to, pos)


  def get_line_index(self, pos:int) -> int:
    text = self.text
    length = len(text)
    if not (0 <= pos <= length): raise IndexError(pos)
    self.update_line_positions(pos)
    if pos == length and text.endswith('\n'):
      return len(self.newline_positions) - 1 # The EOF position does not get a line index beyond the last line.
    return bisect_right(self.newline_positions, pos - 1)


  def get_line_start(self, pos:int) -> int:
    'Return the index of the start of the line containing `pos`.'
    text = self.text
    if pos == len(text) and text.endswith('\n'): pos -= 1
    return text.rfind('\n', 0, pos) + 1 # rfind returns -1 for no match.


  def get_line_end(self, pos:int) -> int:
    'Return the index of the end of the line containing `pos`; the newline is the final character of a line.'
    newline_pos = self.text.find('\n', pos)
    return len(self.text) if newline_pos == -1 else newline_pos + 1


  def snippet(self, pos:int, radius:int=10) -> str:
    'Return the text surrounding `pos`, at most `radius` characters on each side.'
    return self.text[max(0, pos - radius):pos + radius]


  def diagnostic_for_pos(self, pos:int, *, end:int|None=None, msg:str='') -> str:
    '''
    Return a single-line diagnostic for the span `pos` to `end`:
    `name:line:col: msg`, followed by the source line and an underline.
    A zero-length span is marked with a caret.
    '''
    if end is None: end = pos
    assert 0 <= pos <= end, (pos, end)
    line_idx = self.get_line_index(pos)
    line_pos = self.get_line_start(pos)
    line_end = self.get_line_end(pos)
    end = min(end, line_end)
    line_str = self.text[line_pos:line_end]
    src_line = line_str[:-1] if line_str.endswith('\n') else line_str
    src_line = src_line.replace('\r', ' ')

    under_chars = ['\t' if char == '\t' else ' ' for char in line_str[:pos - line_pos]]
    if pos >= end:
      under_chars.append('^')
    else:
      under_chars.extend('~' * (end - pos))
    underline = ''.join(under_chars)

    col = f'{pos - line_pos + 1}-{end - line_pos + 1}' if pos < end else str(pos - line_pos + 1)
    name_colon = (self.name + ':') if self.name else ''
    msg_space = ' ' if msg else ''
    src_bar = '| ' if src_line else '|'
    return f'{name_colon}{line_idx+1}:{col}:{msg_space}{msg}\n{src_bar}{src_line}\n  {underline}\n'
