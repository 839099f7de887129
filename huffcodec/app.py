# ----------------
# Importations
# ----------------
import logging
import os
import tempfile

import streamlit as st

from huffcodec.files import compress_file, decompress_file
from huffcodec.report import COMPRESS_TIMINGS, DECOMPRESS_TIMINGS, code_table_frame, timings_frame
from huffcodec.settings import COMPRESSED_SUFFIX, RESTORED_SUFFIX, configure_logging
from huffcodec.tree import tree_to_dot

configure_logging()
logger = logging.getLogger("huffcodec.app")

# ------------------------
#   Streamlit App
# ------------------------
st.set_page_config(page_title="File Compressor", layout="centered")
st.title("Huffman File Compressor 🗃")

# ---------------------
#    Instructions
# ---------------------
st.subheader("1) Instructions")

st.markdown("""
*How to Use This File Compression Tool*

1. Upload a file using the button below.
2. Choose *Compress* or *Decompress* (.huff files).
3. Click *Process File* to start.
4. Download your file after processing.
""")
st.divider()
# -------------------
# file Uploading
# -------------------
st.subheader("2) File Uploader")
uploaded_file = st.file_uploader("Upload a file", type=None)
if uploaded_file:
    # keep the suffix so the already-compressed checks still see it
    _, ext = os.path.splitext(uploaded_file.name)
    with tempfile.NamedTemporaryFile(delete=False, suffix=ext) as tmp:
        tmp.write(uploaded_file.read())
        tmp_path = tmp.name
    st.success(f"Uploaded file: {uploaded_file.name} ({os.path.getsize(tmp_path)} bytes)")

    action = st.radio("**Choose Action**", ["Compress", "Decompress"])

    if st.button("Process File"):
        st.divider()
        out_path = tmp_path + (COMPRESSED_SUFFIX if action == "Compress" else RESTORED_SUFFIX)
        try:
            with st.spinner(f"{action}ing file..."):
                # ------------------
                #  File Compression
                # ------------------
                if action == "Compress":
                    tree, stats = compress_file(tmp_path, out_path)

                    st.subheader("3) Compression Summary")
                    col1, col2, col3 = st.columns(3)

                    if stats["skipped"]:
                        st.warning(stats["note"])
                        col1.metric("Original Size", f"{stats['original_bytes']} bytes")
                        col2.metric("Compressed Size", f"{stats['compressed_bytes']} bytes")
                        col3.metric("Space Saved", "N/A")
                        st.markdown(
                            f"**Time (read)**: {stats['time_read']:.4f}s, **Total**: {stats['time_total']:.4f}s")
                    else:
                        space_saved = stats["space_saved_percent"]
                        ratio = stats["compression_ratio"]

                        col1.metric("**Original Size**", f"{stats['original_bytes']} bytes")
                        col2.metric("**Compressed Size**", f"{stats['compressed_bytes']} bytes")
                        col3.metric("Space Saved", "N/A" if space_saved is None else f"{space_saved:.2f}%")

                        if ratio is None:
                            st.markdown("*Compression ratio: N/A (empty file)*")
                        else:
                            st.markdown(f"*Compression ratio: {ratio:.4f}* "
                                        f"(payload bits / original bits: {stats['bit_ratio']:.4f})")

                        st.markdown(f"*Unique symbols: {stats['unique_symbols']}*")
                        st.markdown(f"*Tree bytes: {stats['tree_bytes']}*")
                        st.markdown(f"*Padding bits: {stats['pad_count']}*")

                        st.divider()
                        st.subheader("4) Processing Timings")
                        st.table(timings_frame(stats, COMPRESS_TIMINGS))
                        st.divider()
                        st.subheader("5) Huffman Tree")
                        if tree is not None and not tree.is_empty():
                            st.dataframe(code_table_frame(tree))
                            st.graphviz_chart(tree_to_dot(tree))
                        else:
                            st.info("No Huffman tree (empty file).")

                else:
                    # ----------------------
                    # File Decompression
                    # ---------------------
                    stats = decompress_file(tmp_path, out_path)
                    st.subheader("3) Decompression Report")
                    col1, col2, col3 = st.columns(3)
                    col1.metric("Compressed file size", f"{stats['compressed_size']} bytes")
                    col2.metric("Restored file size", f"{stats['restored_size']} bytes")
                    col3.metric("Padding bits", f"{stats['pad_count']}")
                    st.divider()
                    st.subheader("4) Processing Timings")
                    st.table(timings_frame(stats, DECOMPRESS_TIMINGS))

            if os.path.exists(out_path):
                with open(out_path, 'rb') as f:
                    # ------------------------
                    #   File Downloading
                    # ------------------------
                    st.divider()
                    st.subheader("Download Button")
                    st.info(f" Download your {action}ed file here.")
                    st.download_button(
                        label=f"{os.path.basename(out_path)}",
                        data=f.read(),
                        file_name=os.path.basename(out_path),
                        mime="application/octet-stream"
                    )
            else:
                st.info("No output file was produced (compression was skipped). Check the message above.")

        except ValueError as e:
            # bad or corrupt .huff input
            st.error(f"Error: {e}")
        except Exception as e:
            logger.exception("Unexpected failure while processing %s", uploaded_file.name)
            st.error(f"Unexpected Error: {e}")
        finally:
            for path in (tmp_path, out_path):
                if os.path.exists(path):
                    os.remove(path)
