# tasks.py
import logging
import threading
from pathlib import Path

from . import commands
from .backend import format_size, savings_percent
from .constants import SmashError

def start_task(target_func, *args):
    thread = threading.Thread(target=target_func, args=args, daemon=True)
    thread.start()
    return thread

def _report_failure(name, e, q):
    if isinstance(e, (SmashError, OSError, ValueError)):
        logging.error(f"{name} task failed: {e}"); q.put(('complete', f"Error: {e}"))
    else:
        logging.error(f"An unexpected error occurred: {e}", exc_info=True); q.put(('complete', f"An unexpected error occurred: {e}"))

def savings_message(original_size, new_size):
    saved_bytes = original_size - new_size
    if original_size > 0 and saved_bytes > 0:
        return f"Complete. Saved {format_size(saved_bytes)} ({savings_percent(original_size, new_size):.1f}%)."
    return "Complete. File size did not decrease."

def run_compress_task(input_path, output_path, preset, q, gs_path=None):
    try:
        q.put(('status', f"Compressing {Path(input_path).name} ({preset})..."))
        result = commands.compress_pdf(input_path, output_path, preset, gs_path=gs_path)
        q.put(('progress', 100)); q.put(('overall', 100))
        q.put(('complete', savings_message(result.original_size, result.compressed_size)))
        return result
    except Exception as e:
        _report_failure("Compress", e, q)

def run_merge_task(file_list, output_path, q, gs_path=None):
    try:
        q.put(('status', f"Merging {len(file_list)} files..."))
        result = commands.merge_pdfs(file_list, output_path, gs_path=gs_path)
        q.put(('progress', 100)); q.put(('overall', 100))
        q.put(('complete', f"Merge complete. Saved to {Path(result.output_path).name} ({format_size(result.size)})."))
        return result
    except Exception as e:
        _report_failure("Merge", e, q)

def run_split_task(input_path, output_dir, options, q, gs_path=None):
    try:
        q.put(('status', f"Splitting {Path(input_path).name} ({options.mode})..."))
        result = commands.split_pdf(input_path, output_dir, options, gs_path=gs_path)
        q.put(('progress', 100)); q.put(('overall', 100))
        q.put(('complete', f"Splitting complete. Created {len(result.output_paths)} file(s) from {result.total_pages} pages."))
        return result
    except Exception as e:
        _report_failure("Split", e, q)

def run_protect_task(input_path, output_path, user_password, owner_password, q, qpdf_path=None):
    try:
        q.put(('status', "Encrypting PDF..."))
        result = commands.protect_pdf(input_path, user_password, owner_password, output_path, qpdf_path=qpdf_path)
        q.put(('progress', 100)); q.put(('overall', 100))
        q.put(('complete', "Password protection applied."))
        return result
    except Exception as e:
        _report_failure("Protect", e, q)

def run_unlock_task(input_path, output_path, password, q, qpdf_path=None):
    try:
        q.put(('status', "Decrypting PDF..."))
        result = commands.unlock_pdf(input_path, password, output_path, qpdf_path=qpdf_path)
        q.put(('progress', 100)); q.put(('overall', 100))
        q.put(('complete', "Password removed."))
        return result
    except Exception as e:
        _report_failure("Unlock", e, q)

def run_optimize_task(input_path, output_path, q, qpdf_path=None):
    try:
        q.put(('status', "Optimizing for fast web view..."))
        result = commands.optimize_pdf(input_path, output_path, qpdf_path=qpdf_path)
        q.put(('progress', 100)); q.put(('overall', 100))
        q.put(('complete', savings_message(result.original_size, result.compressed_size)))
        return result
    except Exception as e:
        _report_failure("Optimize", e, q)
