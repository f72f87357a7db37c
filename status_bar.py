import os
import time


def render_status(context, width):
    """
    context keys: status_msg, status_until, state, file_path, columns,
                  first_row, last_row
    """
    text = ""
    now = time.time()
    if context.get("status_msg") and now < context.get("status_until", 0):
        text = f" {context['status_msg']}"
    else:
        state = str(context.get("state", "idle")).upper()
        fname = context.get("file_path") or ""
        if fname:
            fname = os.path.basename(fname)
        parts = [state]
        if fname:
            parts.append(fname)
        if state == "LOADED":
            parts.append(f"{context.get('columns', 0)} cols")
            first_row = context.get("first_row")
            if first_row is not None:
                last_row = context.get("last_row", first_row)
                parts.append(f"rows {first_row}-{max(first_row, last_row)}")
        parts.append("o:open q:quit")
        text = " " + " | ".join(parts)

    return text.ljust(width)[:width]
