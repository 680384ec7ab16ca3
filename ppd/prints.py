import sys

COLOR = sys.stderr.isatty()

def colored(*values:str, color) -> str:
    return f'\x1b[38;5;{color}m{" ".join(values)}\x1b[0m' if COLOR and color else ' '.join(values)

def print_colon(previous_value:str, *next_values:object, color=None, file=None) -> None:
    print(colored(previous_value, color=color)+':', *next_values, file=file)

def print_error(*values:object) -> None: print_colon('Error', *values, color=9, file=sys.stderr)

def print_warning(*values:object) -> None: print_colon('Warning', *values, color=11, file=sys.stderr)

def print_line(name:str, value:object, *details:str) -> None:
    print(f'{name}: {value}' + (f' ({", ".join(details)})' if details else ''))
