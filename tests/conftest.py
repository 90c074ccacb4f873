"""Shared fixtures for gospecialize tests."""

import pytest

from gospecialize.source import TemplateSource


LIST_TEMPLATE = """// Package list is a generic list.
package list

import (
	"fmt"

	"github.com/cheekybits/genny/generic"
)

//go:generate genny -in=$GOFILE -out=gen-$GOFILE gen "Item=BUILTINS"

// KeyType is the type of the list keys.
type KeyType generic.Type

// List holds one key.
type List struct {
	Key KeyType
}

// NewKeyTypeList creates a List for the key.
func NewKeyTypeList(key KeyType) *List {
	fmt.Println(key)
	return &List{Key: key}
}

func newKeyTypeHolder() *List {
	return &List{}
}
"""

PAIR_TEMPLATE = """package pair

import "github.com/cheekybits/genny/generic"

type (
	KeyType   generic.Type
	ValueType generic.Number
)

type KeyTypeValueTypePair struct {
	Key   KeyType   `json:"KeyType"`
	Value ValueType `db:"ValueType_value"`
}
"""


@pytest.fixture
def list_source():
    """The list template as a rewindable source."""
    return TemplateSource.from_text(LIST_TEMPLATE, "list.go")


@pytest.fixture
def pair_source():
    """A template with two placeholders declared in a grouped type block."""
    return TemplateSource.from_text(PAIR_TEMPLATE, "pair.go")


@pytest.fixture
def template_file(tmp_path):
    """The list template written to disk."""
    path = tmp_path / "list.go"
    path.write_text(LIST_TEMPLATE)
    return path
