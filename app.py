import streamlit as st
import time
import base64
import pandas as pd
import plotly.graph_objects as go

from codec import ALGORITHM_NAMES, LZ, RLE, decode, encode, wire_bytes
from errors import CodecError
from file_detector import detect_algorithm, sniff_encoded
from lz import lz_decode_with_dictionary, parse_codes
from rle import iter_runs
from metrics import (
    calculate_entropy,
    calculate_compression_ratio,
    calculate_space_saved,
    compare_algorithms,
)

# Page config
st.set_page_config(
    page_title="RLE / LZ Codec Analyzer",
    layout="wide"
)

# Title
st.title("RLE / LZ Codec Analyzer")
st.markdown("---")

# Initialize session state
for key in ['input_bytes', 'file_name', 'encoded_text']:
    if key not in st.session_state:
        st.session_state[key] = None

ALGORITHM_CHOICES = {
    "Run-Length Encoding (RLE)": RLE,
    "Lempel-Ziv (LZ78)": LZ,
}

# Sidebar for controls
with st.sidebar:
    st.header("Settings")

    mode = st.radio(
        "Mode:",
        ["Compress", "Decompress"]
    )

    input_type = st.radio(
        "Input Type:",
        ["Upload File", "Enter Text"]
    )

    if mode == "Compress":
        algorithm_label = st.selectbox(
            "Algorithm:",
            list(ALGORITHM_CHOICES) + ["Auto-detect", "Compare All"]
        )
    else:
        algorithm_label = st.selectbox(
            "Algorithm:",
            list(ALGORITHM_CHOICES) + ["Auto-detect"]
        )


def resolve_algorithm(label, data=None, file_name=None, encoded=None):
    if label in ALGORITHM_CHOICES:
        return ALGORITHM_CHOICES[label]
    if encoded is not None:
        return sniff_encoded(encoded, file_name)
    return detect_algorithm(file_name, data)


def download_link(data, filename, label):
    b64 = base64.b64encode(data).decode()
    return f'<a href="data:application/octet-stream;base64,{b64}" download="{filename}">📥 {label}</a>'


def show_error(message, error):
    st.error(f"{message}: {error}")
    with st.expander("Error Details"):
        st.code(f"{type(error).__name__}: {error}")


def show_rle_details(data):
    with st.expander("🔍 RLE Details"):
        runs = list(iter_runs(data))
        st.write(f"**Number of runs:** {len(runs)}")
        if runs:
            run_lengths = [count for _, count in runs]
            st.write(f"**Average run length:** {sum(run_lengths) / len(run_lengths):.1f}")
            st.write(f"**Longest token:** {max(run_lengths)}")

            table_data = []
            for value, count in runs[:20]:
                table_data.append({
                    "Byte": value,
                    "Character": repr(chr(value))[1:-1],
                    "Run Length": count
                })
            st.table(pd.DataFrame(table_data))


def show_lz_details(encoded):
    with st.expander("🔍 LZ Details"):
        codes = parse_codes(encoded)
        _, dictionary = lz_decode_with_dictionary(codes)

        st.write(f"**Number of codes:** {len(codes)}")
        st.write(f"**Dictionary size:** {len(dictionary)} entries ({dictionary.next_code - 256} learned)")

        if codes:
            st.write("**First 10 codes:** " + ", ".join(str(code) for code in codes[:10]))

            table_data = []
            for code, phrase in dictionary.entries()[:10]:
                table_data.append({
                    "Code": code,
                    "Phrase": repr(phrase)[2:-1][:30]
                })
            if table_data:
                st.write("**Dictionary entries (sample):**")
                st.table(pd.DataFrame(table_data))


def size_chart(original_size, compressed_size):
    fig = go.Figure(data=[
        go.Bar(name='Original', x=['Size'], y=[original_size], marker_color='blue'),
        go.Bar(name='Encoded', x=['Size'], y=[compressed_size], marker_color='green')
    ])
    fig.update_layout(
        title="Size Comparison",
        yaxis_title="Size (bytes)",
        height=300
    )
    return fig


def savings_gauge(savings):
    fig = go.Figure(data=[
        go.Indicator(
            mode="gauge+number",
            value=savings,
            title="Space Saved",
            domain={'x': [0, 1], 'y': [0, 1]},
            gauge={
                'axis': {'range': [min(0, savings), 100]},
                'bar': {'color': "green" if savings > 50 else "orange" if savings > 20 else "red"},
                'steps': [
                    {'range': [0, 20], 'color': "lightcoral"},
                    {'range': [20, 50], 'color': "lightyellow"},
                    {'range': [50, 100], 'color': "lightgreen"}]
            }
        )
    ])
    fig.update_layout(height=300)
    return fig


def comparison_chart(df, column, title, axis_title):
    fig = go.Figure(data=[
        go.Bar(
            x=df["Algorithm"],
            y=df[column],
            text=df[column],
            textposition='auto',
            marker_color=['blue', 'green']
        )
    ])
    fig.update_layout(
        title=title,
        xaxis_title="Algorithm",
        yaxis_title=axis_title,
        height=400
    )
    return fig


def run_compression(input_bytes, algorithm):
    st.header(f"Algorithm: {ALGORITHM_NAMES[algorithm]}")

    try:
        start_time = time.time()
        encoded = encode(input_bytes, algorithm)
        compression_time = time.time() - start_time
        decoded = decode(encoded, algorithm)
    except CodecError as e:
        show_error("Error during compression", e)
        return

    st.session_state.encoded_text = encoded
    original_size = len(input_bytes)
    compressed_size = len(wire_bytes(encoded))
    savings = calculate_space_saved(original_size, compressed_size)

    st.subheader("Compression Results")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Original Size", f"{original_size:,} B")
    with col2:
        st.metric("Encoded Size", f"{compressed_size:,} B")
    with col3:
        st.metric("Space Saved", f"{savings:.1f}%")
    with col4:
        st.metric("Compression Time", f"{compression_time:.3f} s")

    col5, col6 = st.columns(2)
    with col5:
        st.metric("Compression Ratio", f"{calculate_compression_ratio(original_size, compressed_size):.2f}:1")
    with col6:
        st.metric("Entropy", f"{calculate_entropy(input_bytes):.3f} bits/byte")

    st.subheader("Visualization")
    st.plotly_chart(size_chart(original_size, compressed_size), use_container_width=True)
    st.plotly_chart(savings_gauge(savings), use_container_width=True)

    st.subheader("Decompression Test")
    if decoded == input_bytes:
        st.success("**Decompression Successful!** Original and decompressed data match exactly.")
    else:
        st.error(f"**Decompression Failed!** Original: {len(input_bytes)} bytes, Decompressed: {len(decoded)} bytes")

    st.subheader("Download")
    filename = f"{st.session_state.file_name}.{algorithm}.compressed"
    st.markdown(download_link(wire_bytes(encoded), filename, "Download Encoded File"), unsafe_allow_html=True)

    if algorithm == RLE:
        show_rle_details(input_bytes)
    else:
        show_lz_details(encoded)


def run_comparison(input_bytes):
    st.header("Algorithm Comparison")

    try:
        df = compare_algorithms(input_bytes)
    except CodecError as e:
        show_error("Comparison failed", e)
        return

    st.subheader("Comparison Results")
    st.dataframe(df, use_container_width=True)

    st.subheader("Size Comparison")
    st.plotly_chart(comparison_chart(df, "Size (bytes)", "Encoded Size Comparison (lower is better)", "Size (bytes)"),
                    use_container_width=True)

    st.subheader("Time Comparison")
    st.plotly_chart(comparison_chart(df, "Time (s)", "Compression Time Comparison (lower is better)", "Time (seconds)"),
                    use_container_width=True)

    best_size = df.loc[df["Size (bytes)"].idxmin()]
    best_time = df.loc[df["Time (s)"].idxmin()]

    col1, col2 = st.columns(2)
    with col1:
        st.info(f"**Best Size:** {best_size['Algorithm']}\n{best_size['Size (bytes)']:,} bytes")
    with col2:
        st.info(f"**Best Time:** {best_time['Algorithm']}\n{best_time['Time (s)']} seconds")


def run_decompression(encoded, algorithm):
    st.header(f"Algorithm: {ALGORITHM_NAMES[algorithm]}")

    try:
        start_time = time.time()
        decoded = decode(encoded, algorithm)
        decompression_time = time.time() - start_time
    except CodecError as e:
        show_error("Error during decompression", e)
        return

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Encoded Size", f"{len(encoded):,} B")
    with col2:
        st.metric("Decoded Size", f"{len(decoded):,} B")
    with col3:
        st.metric("Decompression Time", f"{decompression_time:.3f} s")

    with st.expander("Decoded Preview (First 500 bytes)"):
        st.text(decoded[:500].decode('utf-8', errors='replace'))

    filename = f"decompressed_{st.session_state.file_name}"
    st.markdown(download_link(decoded, filename, "Download Decoded File"), unsafe_allow_html=True)


# Main area
st.header("Input Data")

if input_type == "Upload File":
    uploaded_file = st.file_uploader("Upload a file:")
    if uploaded_file:
        st.session_state.input_bytes = uploaded_file.read()
        st.session_state.file_name = uploaded_file.name

        col1, col2 = st.columns(2)
        with col1:
            st.metric("File Name", uploaded_file.name)
        with col2:
            st.metric("File Size", f"{len(st.session_state.input_bytes):,} bytes")
    else:
        st.session_state.input_bytes = None
else:
    default_text = "AAAAAAAAAABBBBBBBBBBBCCCCCCCCCCDDDDDDDDDDEEEEEEEEEE" if mode == "Compress" else ""
    input_text = st.text_area(
        "Enter text to compress:" if mode == "Compress" else "Enter encoded text:",
        height=200,
        value=default_text
    )
    if input_text:
        # Encoded RLE text maps characters 1:1 to bytes, plain text is UTF-8
        if mode == "Compress":
            st.session_state.input_bytes = input_text.encode('utf-8')
        else:
            st.session_state.input_bytes = None
            st.session_state.encoded_text = input_text
        st.session_state.file_name = "text_input.txt"
    else:
        st.session_state.input_bytes = None

st.markdown("---")

if mode == "Compress":
    input_bytes = st.session_state.input_bytes
    if input_bytes:
        st.metric("Entropy", f"{calculate_entropy(input_bytes):.3f} bits/byte")

        if algorithm_label == "Compare All":
            if st.button("Compare All Algorithms", type="primary"):
                run_comparison(input_bytes)
        else:
            algorithm = resolve_algorithm(algorithm_label, data=input_bytes,
                                          file_name=st.session_state.file_name)
            if algorithm_label == "Auto-detect":
                st.info(f"Auto-detected algorithm: {ALGORITHM_NAMES[algorithm]}")
            if st.button(f"Run {ALGORITHM_NAMES[algorithm]}", type="primary"):
                run_compression(input_bytes, algorithm)
    else:
        st.info("Please upload a file or enter text to begin compression")
else:
    if input_type == "Upload File":
        encoded = st.session_state.input_bytes
    else:
        encoded = st.session_state.encoded_text if input_text else None

    algorithm = None
    if encoded:
        try:
            algorithm = resolve_algorithm(algorithm_label, encoded=encoded,
                                          file_name=st.session_state.file_name)
        except CodecError as e:
            show_error("Auto-detection failed, pick RLE or LZ in the sidebar", e)

    if algorithm:
        if algorithm_label == "Auto-detect":
            st.info(f"Auto-detected algorithm: {ALGORITHM_NAMES[algorithm]}")
        if st.button(f"Decode with {ALGORITHM_NAMES[algorithm]}", type="primary"):
            run_decompression(encoded, algorithm)
    elif not encoded:
        st.info("Please upload an encoded file or paste encoded text to begin decompression")

# Information section
st.markdown("---")
with st.expander("About the Algorithms"):
    st.markdown("""
    | Algorithm | Best For | Encoded Form | Complexity |
    |-----------|----------|--------------|------------|
    | **RLE** | Long runs of one byte (AAAAABBB) | (byte, run length) pairs, runs capped at 255 | O(n) |
    | **LZ78** | Repeated phrases | Comma separated dictionary codes | O(n) |

    **Key Metrics:**
    - **Compression Ratio:** Original size / Encoded size (higher is better)
    - **Space Saved:** Percentage reduction in size
    - **Entropy:** Theoretical minimum bits per byte

    The LZ dictionary grows by one entry per emitted code and is never pruned,
    so memory use grows with the input size.
    """)
