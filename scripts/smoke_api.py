#!/usr/bin/env python3
"""Smoke script for the evaluation API against a running server."""

import sys

import httpx

from quizgrader.application.use_cases.aggregate_results import aggregate, total_score
from quizgrader.domain.entities.evaluation import ComparisonResult


BASE_URL = "http://127.0.0.1:8001"


def fetch_questions() -> list[dict]:
    print("=" * 60)
    print("Testing GET /api/questions")
    print("=" * 60)

    response = httpx.get(f"{BASE_URL}/api/questions", timeout=10.0)
    response.raise_for_status()
    questions = response.json()
    for q in questions:
        print(f"  {q['id']}. {q['question']}")
    return questions


def evaluate(questions: list[dict]) -> bool:
    print("\n" + "=" * 60)
    print("Testing POST /api/evaluate")
    print("=" * 60)

    sample_answers = {
        1: "A JavaScript library for building user interfaces",
        2: "Props come from the parent and are read-only, state is owned by the component",
        3: "TypeScript with JSX",
        4: "An in-memory copy of the DOM",
        5: "A function that takes a component and returns a component",
    }
    payload = {
        str(q["id"]): {"question": q["question"], "userAnswer": sample_answers.get(q["id"], "I don't know")}
        for q in questions
    }

    try:
        response = httpx.post(f"{BASE_URL}/api/evaluate", json=payload, timeout=120.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return False

    data = response.json()
    comparisons = data["answersComparison"]
    print(f"✅ Success! {len(comparisons)}/{data['totalQuestions']} answers scored")
    for c in comparisons:
        print(f"\n  Question {c['questionId']}: {c.get('question', '')}")
        print(f"    You:   {c['userAnswer']}")
        print(f"    AI:    {c['aiAnswer']}")
        print(f"    Score: {c['scoreOutOfTen']}/10")

    result = aggregate(
        data["totalQuestions"],
        [
            ComparisonResult(
                question_id=c["questionId"],
                question=c.get("question"),
                user_answer=c["userAnswer"],
                ai_answer=c["aiAnswer"],
                score_out_of_ten=c["scoreOutOfTen"],
            )
            for c in comparisons
        ],
    )
    total = total_score(result)
    print(f"\nTotal: {total.earned}/{total.possible} ({total.percentage}%)")
    return True


def main():
    print("\n🚀 Testing Quiz Grader API\n")

    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
        print("✅ Server is running\n")
    except httpx.HTTPError:
        print("❌ Server is not running!")
        print("   Please start it with: uvicorn quizgrader.main:app --reload --port 8001")
        sys.exit(1)

    ok = evaluate(fetch_questions())

    print("\n" + "=" * 60)
    print("✅ Smoke run complete!" if ok else "❌ Smoke run failed")
    print("=" * 60 + "\n")
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
