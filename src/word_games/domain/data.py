from __future__ import annotations

import pathlib
import re
from dataclasses import dataclass
from typing import IO, Union

import pandas as pd

CsvSource = Union[str, pathlib.Path, IO[bytes], IO[str]]


@dataclass(frozen=True)
class WordPair:
    """単語のペア（英語/トルコ語）。

    現状の契約:
    - id: 0 始まりの連番（読み込み順）
    - prompt: 左の盤面に出す英単語（簡易正規化済み）
    - answer: 右の盤面に出す訳語（簡易正規化済み）
    """

    id: int
    prompt: str  # english
    answer: str  # turkish


@dataclass(frozen=True)
class CompoundWord:
    """複合語の問題1件。"""

    id: int
    word1: str
    word2: str
    compound: str
    word1_tr: str
    word2_tr: str
    compound_tr: str


COMPOUND_COLUMNS: tuple[str, ...] = (
    "word1",
    "word2",
    "compound",
    "word1_tr",
    "word2_tr",
    "compound_tr",
)

_PROMPT_HEADERS = ("english", "prompt")
_ANSWER_HEADERS = ("turkish", "answer")


def _normalize_text(s: str | None) -> str:
    """軽量な正規化を行う（前後空白の除去と連続空白の圧縮）。"""
    if s is None:
        return ""
    s = s.strip()
    s = re.sub(r"\s+", " ", s)
    return s


def _read_csv(csv_source: CsvSource) -> pd.DataFrame:
    """ローカルパス / http(s) URL / バッファのいずれかから CSV を読む。"""
    if isinstance(csv_source, (str, pathlib.Path)):
        src = str(csv_source)
        is_url = src.startswith("http://") or src.startswith("https://")
        if not is_url and not pathlib.Path(src).exists():
            raise FileNotFoundError(f"CSV not found: {src}")
    df = pd.read_csv(csv_source, header=0, sep=",", dtype=str, encoding="utf-8")
    # カラム名の空白を除去
    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)
    return df


def _find_column(df: pd.DataFrame, candidates: tuple[str, ...]) -> str | None:
    return next((c for c in df.columns if c.lower() in candidates), None)


def load_word_pairs(csv_source: CsvSource) -> list[WordPair]:
    """CSV から (英語, 訳語) を読み込み、正規化した `WordPair` のリストを返す。

    契約:
    - 入力: ローカルパス、http(s) URL、またはファイルライクオブジェクト。
    - 想定カラム: english, turkish（prompt, answer も可。大文字小文字は無視）
    - 列名が判別できない場合は先頭2列を使う
    - 欠損や空文字の行はスキップ
    - 重複 (prompt, answer) は1件に統合
    """
    df = _read_csv(csv_source)

    col_prompt = _find_column(df, _PROMPT_HEADERS)
    col_answer = _find_column(df, _ANSWER_HEADERS)
    if col_prompt is None or col_answer is None:
        if len(df.columns) >= 2:
            col_prompt, col_answer = df.columns[:2]
        else:
            raise ValueError("CSV has too few columns (english/turkish).")

    records: list[WordPair] = []
    seen: set[tuple[str, str]] = set()
    for _, row in df.iterrows():
        prompt_raw = row.get(col_prompt)
        answer_raw = row.get(col_answer)
        if pd.isna(prompt_raw) or pd.isna(answer_raw):
            continue
        prompt = _normalize_text(str(prompt_raw))
        answer = _normalize_text(str(answer_raw))
        if not prompt or not answer:
            continue
        key = (prompt, answer)
        if key in seen:
            continue
        seen.add(key)
        records.append(WordPair(id=len(records), prompt=prompt, answer=answer))

    if not records:
        raise ValueError("No valid english/turkish pairs found in CSV.")
    return records


def load_compound_words(csv_source: CsvSource) -> list[CompoundWord]:
    """CSV から複合語の問題を読み込む。

    - 6 列（word1, word2, compound, word1_tr, word2_tr, compound_tr）すべて必須
    - いずれかが空の行はスキップ
    - compound は大文字小文字を無視して重複排除
    """
    df = _read_csv(csv_source)
    lookup = {c.lower(): c for c in df.columns}
    missing = [c for c in COMPOUND_COLUMNS if c not in lookup]
    if missing:
        raise ValueError("CSV is missing columns: " + ", ".join(missing))

    records: list[CompoundWord] = []
    seen: set[str] = set()
    for _, row in df.iterrows():
        values: dict[str, str] = {}
        for name in COMPOUND_COLUMNS:
            raw = row.get(lookup[name])
            values[name] = "" if pd.isna(raw) else _normalize_text(str(raw))
        if not all(values.values()):
            continue
        key = values["compound"].lower()
        if key in seen:
            continue
        seen.add(key)
        records.append(CompoundWord(id=len(records), **values))

    if not records:
        raise ValueError("No valid compound words found in CSV.")
    return records


def index_by_id(records):
    """レコードの id をキーにした辞書を作成して返す。"""
    return {r.id: r for r in records}
